# -*- coding: utf-8 -*-
"""
app/modules/payments/models/cart_models.py

Carrito de compra de programas y sus líneas.

Un carrito pasa de 'active' a 'completed' una sola vez, cuando la
reconciliación del checkout terminó de procesar todas sus líneas.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Numeric, String, func, text
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.modules.payments.enums import CartStatus


class Cart(Base):
    __tablename__ = "carts"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False, index=True)
    status: Mapped[CartStatus] = mapped_column(
        CartStatus.as_pg_enum(),
        nullable=False,
        default=CartStatus.ACTIVE,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    items: Mapped[List["CartItem"]] = relationship(
        "CartItem",
        back_populates="cart",
        lazy="selectin",
        order_by="CartItem.id",
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<Cart id={self.id} status={self.status}>"


class CartItem(Base):
    __tablename__ = "cart_items"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    cart_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("carts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    program_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    price_snapshot: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    lesson_detail_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    lesson_detail_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    lesson_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONB, nullable=True)
    sub_profile_id: Mapped[Optional[UUID]] = mapped_column(PG_UUID(as_uuid=True), nullable=True)

    cart: Mapped["Cart"] = relationship("Cart", back_populates="items")

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<CartItem id={self.id} program={self.program_id}>"


__all__ = ["Cart", "CartItem"]

# Fin del archivo app/modules/payments/models/cart_models.py
