# -*- coding: utf-8 -*-
"""
app/modules/payments/services/__init__.py

Autor: StudioHub
Fecha: 2026-10-15
"""

from .transaction_status_service import TransactionStatusService

__all__ = ["TransactionStatusService"]
