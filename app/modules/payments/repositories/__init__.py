# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/__init__.py

Autor: StudioHub
Fecha: 2026-10-15
"""

from .cart_repository import CartRepository
from .transaction_repository import TransactionRepository

__all__ = ["CartRepository", "TransactionRepository"]
