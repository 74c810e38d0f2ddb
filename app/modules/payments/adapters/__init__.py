# -*- coding: utf-8 -*-
"""
app/modules/payments/adapters/__init__.py

Autor: StudioHub
Fecha: 2026-10-15
"""

from .stripe_details_adapter import PaymentDetails, StripePaymentDetailsAdapter

__all__ = ["PaymentDetails", "StripePaymentDetailsAdapter"]
