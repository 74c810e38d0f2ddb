# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/verify.py

Fachada de verificación de firmas para webhooks de Stripe.

Autor: StudioHub
Fecha: 2026-10-15
"""
from __future__ import annotations

from typing import Mapping, Optional

from app.modules.payments.services.webhooks.signature_verification import (
    VerificationResult,
    verify_stripe_signature as _verify_stripe,
)
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

STRIPE_SIGNATURE_HEADER = "stripe-signature"


def get_signature_header(headers: Mapping[str, str]) -> Optional[str]:
    """Extrae el header Stripe-Signature (case-insensitive)."""
    for key, value in headers.items():
        if key.lower() == STRIPE_SIGNATURE_HEADER:
            return value
    return None


def verify_stripe_webhook(
    raw_body: bytes,
    headers: Mapping[str, str],
    # Inyección de dependencias para testing
    settings: Optional[PaymentsSettings] = None,
) -> VerificationResult:
    """
    Verifica la firma de un webhook de Stripe.

    Args:
        raw_body: Body crudo del request
        headers: Headers del request
        settings: Configuración de pagos (opcional, para testing)

    Raises:
        WebhookConfigurationError: si falta STRIPE_WEBHOOK_SECRET y el request viene firmado
    """
    if settings is None:
        settings = get_payments_settings()

    return _verify_stripe(
        payload=raw_body,
        signature_header=get_signature_header(headers),
        webhook_secret=settings.stripe_webhook_secret,
        tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
    )


__all__ = ["STRIPE_SIGNATURE_HEADER", "get_signature_header", "verify_stripe_webhook"]

# Fin del archivo app/modules/payments/facades/webhooks/verify.py
