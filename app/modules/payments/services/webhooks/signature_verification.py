# -*- coding: utf-8 -*-
"""
app/modules/payments/services/webhooks/signature_verification.py

Verificación de firmas de webhooks de Stripe.

- La firma (header Stripe-Signature, esquema t=...,v1=...) se valida con
  stripe.WebhookSignature.verify_header: HMAC-SHA256 sobre el body crudo,
  comparación en tiempo constante y tolerancia de timestamp.
- Request sin header: resultado UNSIGNED; la ruta aplica la política
  configurada (PAYMENTS_UNSIGNED_WEBHOOK_POLICY).
- Secret no configurado: error de configuración, nunca se acepta sin verificar.

Autor: StudioHub
Fecha: 2026-10-15
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

import stripe

logger = logging.getLogger(__name__)


class WebhookConfigurationError(RuntimeError):
    """STRIPE_WEBHOOK_SECRET no configurado."""


class VerificationOutcome(StrEnum):
    VERIFIED = "verified"
    UNSIGNED = "unsigned"
    REJECTED = "rejected"


@dataclass(frozen=True)
class VerificationResult:
    outcome: VerificationOutcome
    reason: Optional[str] = None

    @property
    def verified(self) -> bool:
        return self.outcome is VerificationOutcome.VERIFIED

    @property
    def unsigned(self) -> bool:
        return self.outcome is VerificationOutcome.UNSIGNED

    @property
    def rejected(self) -> bool:
        return self.outcome is VerificationOutcome.REJECTED


def verify_stripe_signature(
    payload: bytes,
    signature_header: Optional[str],
    webhook_secret: Optional[str],
    tolerance_seconds: int = 300,
) -> VerificationResult:
    """
    Verifica la firma de un webhook de Stripe.

    Args:
        payload: Body crudo del request
        signature_header: Header Stripe-Signature
        webhook_secret: Secret del webhook (whsec_...)
        tolerance_seconds: Tolerancia de timestamp (default 5 minutos)

    Raises:
        WebhookConfigurationError: si falta el secret
    """
    if not signature_header:
        return VerificationResult(VerificationOutcome.UNSIGNED, "missing_signature_header")

    if not webhook_secret:
        logger.error("Stripe webhook rechazado: STRIPE_WEBHOOK_SECRET no configurado.")
        raise WebhookConfigurationError("STRIPE_WEBHOOK_SECRET not configured")

    try:
        body = payload.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Stripe webhook rechazado: body no es UTF-8")
        return VerificationResult(VerificationOutcome.REJECTED, "invalid_payload_encoding")

    try:
        stripe.WebhookSignature.verify_header(
            body,
            signature_header,
            webhook_secret,
            tolerance=tolerance_seconds,
        )
    except stripe.SignatureVerificationError as e:
        logger.warning("Stripe webhook rechazado: %s", e)
        return VerificationResult(VerificationOutcome.REJECTED, "invalid_signature")

    logger.debug("Stripe webhook: firma verificada correctamente")
    return VerificationResult(VerificationOutcome.VERIFIED)


__all__ = [
    "WebhookConfigurationError",
    "VerificationOutcome",
    "VerificationResult",
    "verify_stripe_signature",
]

# Fin del archivo app/modules/payments/services/webhooks/signature_verification.py
