# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/transaction_repository.py

Repositorio para la tabla stripe_transactions.

Autor: StudioHub
Fecha: 2026-10-15
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.models import StripeTransaction


class TransactionRepository:

    async def get_by_checkout_session_id(
        self,
        session: AsyncSession,
        stripe_checkout_session_id: str,
    ) -> Optional[StripeTransaction]:
        stmt = select(StripeTransaction).where(
            StripeTransaction.stripe_checkout_session_id == stripe_checkout_session_id
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def save(
        self,
        session: AsyncSession,
        tx: StripeTransaction,
    ) -> StripeTransaction:
        session.add(tx)
        await session.flush()
        return tx

# Fin del archivo app/modules/payments/repositories/transaction_repository.py
