# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Autor: StudioHub
Fecha: 2026-10-15
"""

from .cart_status_enum import CartStatus
from .transaction_status_enum import MANUAL_REVIEW_STATUSES, TransactionStatus

__all__ = ["CartStatus", "MANUAL_REVIEW_STATUSES", "TransactionStatus"]

# Fin del archivo app/modules/payments/enums/__init__.py
