# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/transaction_status_enum.py

Enum de estados de stripe_transactions.
Sincronizado con el tipo ENUM de PostgreSQL: stripe_transaction_status_enum.

Autor: StudioHub
Fecha: 2026-10-15
"""

from enum import StrEnum
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from app.shared.database.base import as_pg_enum as _as_pg_enum


class TransactionStatus(StrEnum):
    """Estado terminal de una transacción tras la reconciliación."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED_PROFILE_INCOMPLETE = "failed_profile_incomplete"
    NEEDS_MANUAL_REVIEW_FULL = "needs_manual_review_full"

    __pg_enum_name__ = "stripe_transaction_status_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "stripe_transaction_status_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)


# Estados que requieren intervención de un admin; un replay no los pisa
MANUAL_REVIEW_STATUSES = frozenset({
    TransactionStatus.FAILED_PROFILE_INCOMPLETE,
    TransactionStatus.NEEDS_MANUAL_REVIEW_FULL,
})


__all__ = ["TransactionStatus", "MANUAL_REVIEW_STATUSES"]

# Fin del archivo app/modules/payments/enums/transaction_status_enum.py
