# -*- coding: utf-8 -*-
"""
app/modules/class_passes/services.py

Otorgamiento de créditos por compra de class pass.

Idempotencia en dos niveles:
- class_pass_purchases: UNIQUE(stripe_checkout_session_id); una colisión
  significa "ya procesado" y el flujo continúa
- class_pass_ledger: un único movimiento 'purchase' por compra; si ya existe
  no se agrega otro, así un replay nunca duplica créditos

Autor: StudioHub
Fecha: 2026-10-14
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.utils.datetime_helpers import add_months, utcnow
from .repositories import ClassPassLedgerRepository, ClassPassPurchaseRepository

logger = logging.getLogger(__name__)


class ClassPassPurchaseMissingError(RuntimeError):
    """La compra no pudo releerse tras el insert."""


@dataclass
class ClassPassGrant:
    """Resultado de otorgar un class pass."""
    purchase_id: UUID
    purchase_created: bool
    ledger_entry_id: Optional[UUID]
    ledger_created: bool
    credits: int
    expires_at: Optional[datetime]


class CreditLedgerGranter:
    """
    Registra la compra y abona los créditos en el ledger.
    """

    def __init__(
        self,
        purchase_repo: Optional[ClassPassPurchaseRepository] = None,
        ledger_repo: Optional[ClassPassLedgerRepository] = None,
    ):
        self.purchase_repo = purchase_repo or ClassPassPurchaseRepository()
        self.ledger_repo = ledger_repo or ClassPassLedgerRepository()

    async def grant(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        studio_id: UUID,
        product_id: UUID,
        credit_count: int,
        expiration_months: Optional[int],
        stripe_checkout_session_id: str,
        now: Optional[datetime] = None,
    ) -> ClassPassGrant:
        now = now or utcnow()
        expires_at = (
            add_months(now, expiration_months)
            if expiration_months and expiration_months > 0
            else None
        )

        created = await self.purchase_repo.insert_if_absent(
            session,
            user_id=user_id,
            studio_id=studio_id,
            product_id=product_id,
            stripe_checkout_session_id=stripe_checkout_session_id,
            credits_total=credit_count,
            expires_at=expires_at,
        )
        if not created:
            logger.info(
                "class_pass_purchase_exists session=%s (already processed)",
                stripe_checkout_session_id,
            )

        # Releer cubre tanto el insert nuevo como el ya existente
        purchase = await self.purchase_repo.get_by_session_id(session, stripe_checkout_session_id)
        if purchase is None:
            raise ClassPassPurchaseMissingError(
                f"class pass purchase not found after insert session={stripe_checkout_session_id}"
            )

        entry_id: Optional[UUID] = None
        ledger_created = False
        if purchase.credits_total > 0:
            existing = await self.ledger_repo.get_purchase_grant(session, purchase.id)
            if existing is not None:
                entry_id = existing.id
                logger.info(
                    "class_pass_ledger_grant_exists purchase=%s entry=%s",
                    purchase.id, existing.id,
                )
            else:
                entry, ledger_created = await self.ledger_repo.append_purchase_grant(
                    session,
                    purchase=purchase,
                    delta=purchase.credits_total,
                    entry_metadata={
                        "product_id": str(product_id),
                        "stripe_checkout_session_id": stripe_checkout_session_id,
                    },
                )
                entry_id = entry.id

        logger.info(
            "class_pass_granted purchase=%s user=%s studio=%s credits=%d expires_at=%s new_purchase=%s new_entry=%s",
            purchase.id, str(user_id)[:8], studio_id, purchase.credits_total,
            purchase.expires_at.isoformat() if purchase.expires_at else None,
            created, ledger_created,
        )

        return ClassPassGrant(
            purchase_id=purchase.id,
            purchase_created=created,
            ledger_entry_id=entry_id,
            ledger_created=ledger_created,
            credits=purchase.credits_total,
            expires_at=purchase.expires_at,
        )

    async def get_balance(
        self,
        session: AsyncSession,
        user_id: UUID,
        studio_id: UUID,
    ) -> int:
        """Saldo = SUM(delta) del ledger para el usuario/estudio."""
        return await self.ledger_repo.get_balance(session, user_id, studio_id)


__all__ = ["ClassPassGrant", "ClassPassPurchaseMissingError", "CreditLedgerGranter"]
