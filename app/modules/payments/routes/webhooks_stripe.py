# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/webhooks_stripe.py

Webhook endpoint para Stripe.

Endpoint:
- POST /payments/webhooks/stripe

Respuestas:
- 200: evento aceptado (incluye no-ops: tipo ignorado, usuario sin resolver,
  request sin firma bajo la política "acknowledge")
- 400: firma inválida, request sin firma bajo la política "reject", payload malformado
- 500: STRIPE_WEBHOOK_SECRET no configurado o error inesperado (Stripe reintenta)

Autor: StudioHub
Fecha: 2026-10-16
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import get_payments_settings
from app.shared.database.database import get_async_session
from app.modules.payments.facades.webhooks import (
    PaymentEventReconciler,
    WebhookNormalizationError,
    build_default_reconciler,
    normalize_stripe_event,
    verify_stripe_webhook,
)
from app.modules.payments.metrics import (
    inc_webhook_outcome,
    inc_webhook_received,
    inc_webhook_verified,
)
from app.modules.payments.services.webhooks import WebhookConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


def get_payment_event_reconciler() -> PaymentEventReconciler:
    """Dependencia FastAPI; los tests la sobreescriben con dependency_overrides."""
    return build_default_reconciler()


@router.post(
    "/stripe",
    status_code=status.HTTP_200_OK,
)
async def stripe_webhook(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    reconciler: PaymentEventReconciler = Depends(get_payment_event_reconciler),
) -> Dict[str, Any]:
    """
    Webhook de Stripe: reconcilia checkout.session.completed.

    Requiere header Stripe-Signature. La firma se verifica sobre el body crudo
    antes de cualquier escritura.
    """
    inc_webhook_received()
    settings = get_payments_settings()

    raw_body = await request.body()

    try:
        verification = verify_stripe_webhook(raw_body, request.headers, settings=settings)
    except WebhookConfigurationError as e:
        inc_webhook_verified("misconfigured")
        inc_webhook_outcome("error")
        logger.error("Webhook configuration error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook not configured",
        )

    inc_webhook_verified(verification.outcome.value)

    if verification.unsigned:
        if settings.unsigned_webhook_policy == "reject":
            inc_webhook_outcome("invalid")
            logger.warning("Webhook rejected: missing Stripe-Signature header")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing Stripe-Signature header",
            )
        inc_webhook_outcome("unsigned")
        logger.warning("Webhook acknowledged without processing: missing Stripe-Signature header")
        return {"received": True, "handled": False, "reason": "unsigned_request"}

    if verification.rejected:
        inc_webhook_outcome("invalid")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid signature",
        )

    try:
        event = normalize_stripe_event(raw_body)
    except WebhookNormalizationError as e:
        inc_webhook_outcome("invalid")
        logger.warning("Webhook payload rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid webhook payload",
        )

    logger.info("Stripe webhook received: type=%s id=%s", event.type, event.id)

    try:
        report = await reconciler.reconcile(session, event)
        await session.commit()
    except Exception:
        await session.rollback()
        inc_webhook_outcome("error")
        logger.exception("Error processing Stripe webhook: id=%s type=%s", event.id, event.type)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook processing error",
        )

    inc_webhook_outcome("handled" if report.handled else "ignored")
    return {"received": True, **report.to_dict()}


__all__ = ["router", "get_payment_event_reconciler"]

# Fin del archivo app/modules/payments/routes/webhooks_stripe.py
