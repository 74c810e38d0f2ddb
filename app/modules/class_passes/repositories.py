# -*- coding: utf-8 -*-
"""
app/modules/class_passes/repositories.py

Repositorios para compras de class pass y su ledger.

Autor: StudioHub
Fecha: 2026-10-14
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .enums import ClassPassPurchaseStatus, LedgerReason
from .models import ClassPassLedgerEntry, ClassPassPurchase

logger = logging.getLogger(__name__)


class ClassPassPurchaseRepository:

    async def insert_if_absent(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        studio_id: UUID,
        product_id: UUID,
        stripe_checkout_session_id: str,
        credits_total: int,
        expires_at: Optional[datetime],
    ) -> bool:
        """
        INSERT ... ON CONFLICT (stripe_checkout_session_id) DO NOTHING.

        Returns:
            True si se insertó, False si la sesión ya estaba registrada
        """
        stmt = (
            pg_insert(ClassPassPurchase)
            .values(
                user_id=user_id,
                studio_id=studio_id,
                product_id=product_id,
                stripe_checkout_session_id=stripe_checkout_session_id,
                credits_total=credits_total,
                credits_used=0,
                expires_at=expires_at,
                status=ClassPassPurchaseStatus.PAID.value,
            )
            .on_conflict_do_nothing(index_elements=[ClassPassPurchase.stripe_checkout_session_id])
            .returning(ClassPassPurchase.id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_by_session_id(
        self,
        session: AsyncSession,
        stripe_checkout_session_id: str,
    ) -> Optional[ClassPassPurchase]:
        stmt = select(ClassPassPurchase).where(
            ClassPassPurchase.stripe_checkout_session_id == stripe_checkout_session_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class ClassPassLedgerRepository:
    """Ledger append-only: solo inserción y lectura."""

    async def get_purchase_grant(
        self,
        session: AsyncSession,
        purchase_id: UUID,
    ) -> Optional[ClassPassLedgerEntry]:
        stmt = select(ClassPassLedgerEntry).where(
            ClassPassLedgerEntry.purchase_id == purchase_id,
            ClassPassLedgerEntry.reason == LedgerReason.PURCHASE.value,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def append_purchase_grant(
        self,
        session: AsyncSession,
        *,
        purchase: ClassPassPurchase,
        delta: int,
        entry_metadata: Optional[dict] = None,
    ) -> tuple[ClassPassLedgerEntry, bool]:
        """
        Agrega el movimiento 'purchase' de una compra.

        Usa SAVEPOINT: si otra entrega concurrente ya lo insertó, el índice
        único parcial rechaza el segundo y se devuelve el existente.

        Returns:
            Tuple (entry, created: bool)
        """
        if delta == 0:
            raise ValueError("delta cannot be zero")

        try:
            async with session.begin_nested():
                entry = ClassPassLedgerEntry(
                    user_id=purchase.user_id,
                    studio_id=purchase.studio_id,
                    purchase_id=purchase.id,
                    delta=delta,
                    reason=LedgerReason.PURCHASE.value,
                    entry_metadata=entry_metadata or {},
                )
                session.add(entry)
                await session.flush()
            return entry, True
        except IntegrityError:
            logger.debug("ledger purchase grant already exists purchase=%s (concurrent)", purchase.id)

        existing = await self.get_purchase_grant(session, purchase.id)
        if existing is None:
            raise RuntimeError(f"Failed to append ledger grant for purchase {purchase.id}")
        return existing, False

    async def get_balance(
        self,
        session: AsyncSession,
        user_id: UUID,
        studio_id: UUID,
    ) -> int:
        stmt = select(func.coalesce(func.sum(ClassPassLedgerEntry.delta), 0)).where(
            ClassPassLedgerEntry.user_id == user_id,
            ClassPassLedgerEntry.studio_id == studio_id,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())


__all__ = ["ClassPassPurchaseRepository", "ClassPassLedgerRepository"]
