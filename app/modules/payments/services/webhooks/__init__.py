# -*- coding: utf-8 -*-
"""
app/modules/payments/services/webhooks/__init__.py

Servicios relacionados con webhooks de pagos.

Autor: StudioHub
Fecha: 2026-10-15
"""

from .signature_verification import (
    VerificationOutcome,
    VerificationResult,
    WebhookConfigurationError,
    verify_stripe_signature,
)

__all__ = [
    "VerificationOutcome",
    "VerificationResult",
    "WebhookConfigurationError",
    "verify_stripe_signature",
]

# Fin del archivo app/modules/payments/services/webhooks/__init__.py
