# -*- coding: utf-8 -*-
"""
app/modules/payments/models/transaction_models.py

Transacción de Stripe: un intento de pago iniciado por el checkout.

La fila se crea al iniciar el checkout (fuera de este servicio). La
reconciliación solo la actualiza: estado, ids de Stripe y detalles de
revisión manual dentro de `metadata`. Nunca se borra.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import DateTime, Numeric, String, func, text
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base
from app.modules.payments.enums import TransactionStatus


class StripeTransaction(Base):
    __tablename__ = "stripe_transactions"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )

    user_id: Mapped[Optional[UUID]] = mapped_column(PG_UUID(as_uuid=True), nullable=True, index=True)
    studio_id: Mapped[Optional[UUID]] = mapped_column(PG_UUID(as_uuid=True), nullable=True)
    program_id: Mapped[Optional[UUID]] = mapped_column(PG_UUID(as_uuid=True), nullable=True)

    stripe_checkout_session_id: Mapped[Optional[str]] = mapped_column(
        String,
        nullable=True,
        unique=True,
        doc="ID de la Checkout Session (cs_...).",
    )
    stripe_payment_intent_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    stripe_charge_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    payment_method_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    stripe_account_id: Mapped[Optional[str]] = mapped_column(
        String,
        nullable=True,
        doc="Cuenta conectada del estudio (acct_...), si aplica.",
    )

    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)

    status: Mapped[TransactionStatus] = mapped_column(
        TransactionStatus.as_pg_enum(),
        nullable=False,
        default=TransactionStatus.PENDING,
    )

    # cart_id / program_id / parámetros de class pass; más detalles de revisión
    tx_metadata: Mapped[dict[str, Any]] = mapped_column(
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
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<StripeTransaction id={self.id} session={self.stripe_checkout_session_id} status={self.status}>"


__all__ = ["StripeTransaction"]

# Fin del archivo app/modules/payments/models/transaction_models.py
