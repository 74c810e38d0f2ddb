# -*- coding: utf-8 -*-
"""
app/modules/payments/adapters/stripe_details_adapter.py

Enriquecimiento best-effort de una transacción con datos del PaymentIntent
(charge id y tipo de método de pago).

El SDK de Stripe es síncrono: la llamada corre en el threadpool de
Starlette y se acota con un timeout. Cualquier fallo devuelve None; la
reconciliación nunca depende de este dato para admitir a un cliente.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import stripe
from fastapi.concurrency import run_in_threadpool

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentDetails:
    charge_id: Optional[str] = None
    payment_method_type: Optional[str] = None


def details_from_payment_intent(intent: Mapping[str, Any]) -> PaymentDetails:
    """Extrae charge id y método de pago de un PaymentIntent (latest_charge expandido o no)."""
    charge_id: Optional[str] = None
    method_type: Optional[str] = None

    latest_charge = intent.get("latest_charge")
    if isinstance(latest_charge, str):
        charge_id = latest_charge
    elif latest_charge:
        charge_id = latest_charge.get("id")
        method_details = latest_charge.get("payment_method_details") or {}
        method_type = method_details.get("type")

    if not method_type:
        types = intent.get("payment_method_types") or []
        method_type = types[0] if types else None

    return PaymentDetails(charge_id=charge_id, payment_method_type=method_type)


class StripePaymentDetailsAdapter:

    def __init__(self, settings: Optional[PaymentsSettings] = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> PaymentsSettings:
        return self._settings or get_payments_settings()

    def _retrieve(self, payment_intent_id: str, account_id: Optional[str], api_key: str) -> Any:
        params: dict[str, Any] = {"api_key": api_key, "expand": ["latest_charge"]}
        if account_id:
            params["stripe_account"] = account_id
        return stripe.PaymentIntent.retrieve(payment_intent_id, **params)

    async def fetch_payment_details(
        self,
        payment_intent_id: Optional[str],
        account_id: Optional[str] = None,
    ) -> Optional[PaymentDetails]:
        if not payment_intent_id:
            return None

        settings = self.settings
        if not settings.stripe_secret_key:
            logger.debug("payment_details_skipped reason=no_secret_key pi=%s", payment_intent_id)
            return None

        try:
            async with asyncio.timeout(settings.payment_details_timeout_seconds):
                intent = await run_in_threadpool(
                    self._retrieve,
                    payment_intent_id,
                    account_id,
                    settings.stripe_secret_key,
                )
            return details_from_payment_intent(intent)
        except Exception as e:  # enriquecimiento best-effort: timeout, StripeError, datos inesperados
            logger.warning(
                "payment_details_unavailable pi=%s account=%s error=%s",
                payment_intent_id, account_id, type(e).__name__,
            )
            return None


__all__ = ["PaymentDetails", "StripePaymentDetailsAdapter", "details_from_payment_intent"]

# Fin del archivo app/modules/payments/adapters/stripe_details_adapter.py
