# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/__init__.py

Fachadas del webhook de Stripe: verificación, normalización y
orquestación de la reconciliación.

Autor: StudioHub
Fecha: 2026-10-16
"""

from .handler import PaymentEventReconciler, build_default_reconciler
from .normalize import WebhookNormalizationError, normalize_stripe_event
from .results import ItemKind, ItemOutcome, ItemStatus, ReconciliationReport
from .verify import STRIPE_SIGNATURE_HEADER, get_signature_header, verify_stripe_webhook

__all__ = [
    "PaymentEventReconciler",
    "build_default_reconciler",
    "WebhookNormalizationError",
    "normalize_stripe_event",
    "ItemKind",
    "ItemOutcome",
    "ItemStatus",
    "ReconciliationReport",
    "STRIPE_SIGNATURE_HEADER",
    "get_signature_header",
    "verify_stripe_webhook",
]

# Fin del archivo app/modules/payments/facades/webhooks/__init__.py
