# -*- coding: utf-8 -*-
"""
app/modules/class_passes/models.py

Modelos ORM para class passes.

Tablas:
- class_pass_purchases: una fila por compra; UNIQUE(stripe_checkout_session_id)
- class_pass_ledger: movimientos append-only; el saldo es SUM(delta)
  por usuario/estudio. Índice único parcial: un único movimiento
  'purchase' por compra.

Autor: StudioHub
Fecha: 2026-10-14
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base
from .enums import ClassPassPurchaseStatus


class ClassPassPurchase(Base):
    __tablename__ = "class_pass_purchases"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False, index=True)
    studio_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False, index=True)
    product_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)

    stripe_checkout_session_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
    )

    credits_total: Mapped[int] = mapped_column(Integer, nullable=False)
    # Lo mantiene el flujo de inscripción con créditos
    credits_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    status: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=ClassPassPurchaseStatus.PAID.value,
        server_default=ClassPassPurchaseStatus.PAID.value,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<ClassPassPurchase id={self.id} credits={self.credits_total} session={self.stripe_checkout_session_id}>"


class ClassPassLedgerEntry(Base):
    """
    Movimiento inmutable del ledger de créditos.

    Nunca se actualiza ni se borra.
    """

    __tablename__ = "class_pass_ledger"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    studio_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    purchase_id: Mapped[Optional[UUID]] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("class_pass_purchases.id", ondelete="RESTRICT"),
        nullable=True,
    )

    delta: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)

    # Atributo entry_metadata mapeado a la columna real "metadata"
    entry_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONB,
        nullable=False,
        default=dict,
        server_default=text("'{}'::jsonb"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("delta <> 0", name="delta_nonzero"),
        Index("ix_class_pass_ledger_user_studio", "user_id", "studio_id"),
        Index(
            "uq_class_pass_ledger_purchase_grant",
            "purchase_id",
            unique=True,
            postgresql_where=text("reason = 'purchase'"),
        ),
    )

    def __repr__(self) -> str:
        return f"<ClassPassLedgerEntry id={self.id} user={self.user_id} delta={self.delta:+d} reason={self.reason}>"


__all__ = ["ClassPassPurchase", "ClassPassLedgerEntry"]
