# -*- coding: utf-8 -*-
"""
app/modules/payments/services/transaction_status_service.py

Actualización del estado terminal de stripe_transactions.

Reglas:
- pending -> succeeded al confirmar el pago, guardando payment intent,
  charge id y método de pago.
- Un estado de revisión manual (failed_profile_incomplete,
  needs_manual_review_full) no se pisa con succeeded en un replay.
- Los detalles de revisión se fusionan en `metadata`, nunca la reemplazan.
- Sesión desconocida: se registra en el log y se devuelve None; la
  reconciliación sigue con la metadata del evento.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.enums import MANUAL_REVIEW_STATUSES, TransactionStatus
from app.modules.payments.models import StripeTransaction
from app.modules.payments.repositories import TransactionRepository

if TYPE_CHECKING:
    from app.modules.payments.adapters.stripe_details_adapter import PaymentDetails

logger = logging.getLogger(__name__)


def _merge_metadata(tx: StripeTransaction, extra: dict[str, Any]) -> None:
    # Reasignar el dict completo para que SQLAlchemy detecte el cambio en JSONB
    tx.tx_metadata = {**(tx.tx_metadata or {}), **extra}


class TransactionStatusService:

    def __init__(self, repo: Optional[TransactionRepository] = None) -> None:
        self.repo = repo or TransactionRepository()

    async def mark_succeeded(
        self,
        session: AsyncSession,
        checkout_session_id: str,
        *,
        payment_intent_id: Optional[str] = None,
        details: Optional["PaymentDetails"] = None,
    ) -> Optional[StripeTransaction]:
        tx = await self.repo.get_by_checkout_session_id(session, checkout_session_id)
        if tx is None:
            logger.warning("transaction_not_found session=%s", checkout_session_id)
            return None

        if tx.status in MANUAL_REVIEW_STATUSES:
            logger.info(
                "transaction_keeps_review_status id=%s status=%s",
                tx.id, tx.status,
            )
        else:
            tx.status = TransactionStatus.SUCCEEDED

        if payment_intent_id:
            tx.stripe_payment_intent_id = payment_intent_id
        if details is not None:
            if details.charge_id:
                tx.stripe_charge_id = details.charge_id
            if details.payment_method_type:
                tx.payment_method_type = details.payment_method_type

        await self.repo.save(session, tx)
        logger.info(
            "transaction_confirmed id=%s session=%s status=%s",
            tx.id, checkout_session_id, tx.status,
        )
        return tx

    async def mark_profile_incomplete(
        self,
        session: AsyncSession,
        tx: Optional[StripeTransaction],
        missing: list[str],
    ) -> Optional[StripeTransaction]:
        if tx is None:
            logger.warning("profile_incomplete_without_transaction missing=%s", missing)
            return None

        tx.status = TransactionStatus.FAILED_PROFILE_INCOMPLETE
        _merge_metadata(tx, {"missing": list(missing)})
        await self.repo.save(session, tx)
        logger.warning("transaction_profile_incomplete id=%s missing=%s", tx.id, missing)
        return tx

    async def mark_needs_manual_review_full(
        self,
        session: AsyncSession,
        tx: Optional[StripeTransaction],
        blocked_program_ids: Iterable[UUID],
    ) -> Optional[StripeTransaction]:
        blocked = [str(pid) for pid in blocked_program_ids]
        if tx is None:
            logger.warning("blocked_programs_without_transaction programs=%s", blocked)
            return None

        previous = list((tx.tx_metadata or {}).get("blocked_program_ids") or [])
        merged = previous + [pid for pid in blocked if pid not in previous]

        tx.status = TransactionStatus.NEEDS_MANUAL_REVIEW_FULL
        _merge_metadata(tx, {"blocked_program_ids": merged})
        await self.repo.save(session, tx)
        logger.warning("transaction_needs_manual_review_full id=%s programs=%s", tx.id, merged)
        return tx


__all__ = ["TransactionStatusService"]

# Fin del archivo app/modules/payments/services/transaction_status_service.py
