# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/normalize.py

Normalización de payloads de webhooks de Stripe a eventos tipados.

Se ejecuta después de verificar la firma y antes del orquestador: el
orquestador solo recibe CheckoutSessionCompletedEvent o IgnoredEvent.

Autor: StudioHub
Fecha: 2026-10-15
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError

from app.modules.payments.schemas import (
    CHECKOUT_SESSION_COMPLETED,
    CheckoutSessionCompletedEvent,
    IgnoredEvent,
    WebhookEvent,
)

logger = logging.getLogger(__name__)


class WebhookNormalizationError(ValueError):
    """Error al normalizar un webhook."""
    pass


def normalize_stripe_event(payload: Union[bytes, str, Mapping[str, Any]]) -> WebhookEvent:
    """
    Convierte el body de un webhook de Stripe en un evento tipado.

    Raises:
        WebhookNormalizationError: JSON inválido, sin id/type o sin
            data.object. La metadata que no valida llega como InvalidMetadata.
    """
    if isinstance(payload, (bytes, str)):
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise WebhookNormalizationError(f"Invalid JSON payload: {e}")
    else:
        data = dict(payload)

    if not isinstance(data, dict):
        raise WebhookNormalizationError("Payload must be a JSON object")

    event_type = data.get("type")
    if not data.get("id") or not event_type:
        raise WebhookNormalizationError("Invalid Stripe webhook: missing 'type' or 'id'")

    try:
        if event_type == CHECKOUT_SESSION_COMPLETED:
            return CheckoutSessionCompletedEvent.model_validate(data)
        return IgnoredEvent.model_validate(data)
    except ValidationError as e:
        logger.warning(
            "webhook_normalization_failed event=%s type=%s errors=%d",
            data.get("id"), event_type, e.error_count(),
        )
        raise WebhookNormalizationError(f"Invalid {event_type} payload: {e}") from e


__all__ = ["WebhookNormalizationError", "normalize_stripe_event"]

# Fin del archivo app/modules/payments/facades/webhooks/normalize.py
