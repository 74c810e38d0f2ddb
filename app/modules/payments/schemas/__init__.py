# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/__init__.py

Esquemas Pydantic de eventos de webhook de Stripe.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

from .webhook_event_schemas import (
    CHECKOUT_SESSION_COMPLETED,
    CartMetadata,
    CheckoutSession,
    CheckoutSessionCompletedEvent,
    ClassPassMetadata,
    IgnoredEvent,
    InvalidMetadata,
    PurchaseMetadata,
    SingleProgramMetadata,
    UnknownMetadata,
    WebhookEvent,
    parse_purchase_metadata,
)

__all__ = [
    "CHECKOUT_SESSION_COMPLETED",
    "CartMetadata",
    "CheckoutSession",
    "CheckoutSessionCompletedEvent",
    "ClassPassMetadata",
    "IgnoredEvent",
    "InvalidMetadata",
    "PurchaseMetadata",
    "SingleProgramMetadata",
    "UnknownMetadata",
    "WebhookEvent",
    "parse_purchase_metadata",
]
