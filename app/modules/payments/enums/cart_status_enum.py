# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/cart_status_enum.py

Estados del carrito. Sincronizado con: cart_status_enum.

Autor: StudioHub
Fecha: 2026-10-15
"""

from enum import StrEnum
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from app.shared.database.base import as_pg_enum as _as_pg_enum


class CartStatus(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"

    __pg_enum_name__ = "cart_status_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "cart_status_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)


__all__ = ["CartStatus"]

# Fin del archivo app/modules/payments/enums/cart_status_enum.py
