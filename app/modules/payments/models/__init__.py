# -*- coding: utf-8 -*-
"""
app/modules/payments/models/__init__.py

Punto de entrada de modelos ORM del módulo Payments.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

from .cart_models import Cart, CartItem
from .transaction_models import StripeTransaction

__all__ = ["Cart", "CartItem", "StripeTransaction"]

# Fin del archivo app/modules/payments/models/__init__.py
