# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/cart_repository.py

Repositorio de carritos: lectura de líneas y cierre del carrito.

Autor: StudioHub
Fecha: 2026-10-15
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.enums import CartStatus
from app.modules.payments.models import Cart, CartItem
from app.shared.utils.datetime_helpers import utcnow


class CartRepository:

    async def list_items(
        self,
        session: AsyncSession,
        cart_id: UUID,
    ) -> Sequence[CartItem]:
        stmt = select(CartItem).where(CartItem.cart_id == cart_id).order_by(CartItem.id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def mark_completed(
        self,
        session: AsyncSession,
        cart_id: UUID,
    ) -> bool:
        """
        active -> completed. Un carrito ya completado no se toca.

        Returns:
            True si esta llamada hizo la transición
        """
        stmt = (
            update(Cart)
            .where(Cart.id == cart_id, Cart.status == CartStatus.ACTIVE)
            .values(status=CartStatus.COMPLETED, updated_at=utcnow())
        )
        result = await session.execute(stmt)
        return (result.rowcount or 0) > 0

# Fin del archivo app/modules/payments/repositories/cart_repository.py
