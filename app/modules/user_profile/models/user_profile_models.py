# -*- coding: utf-8 -*-
"""
app/modules/user_profile/models/user_profile_models.py

Modelos ORM de las dos fuentes de datos personales:

- UserProfile (user_profiles): perfil normalizado que mantiene la app.
  Conserva las columnas históricas en neerlandés (voornaam, stad, ...)
  de los perfiles migrados.
- AuthUser (users): espejo del proveedor de identidad; los datos capturados
  en el registro viven en `user_metadata` (JSONB) con nombres históricos
  en inglés o en neerlandés.

Autor: StudioHub
Fecha: 2026-10-13
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import Date, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=False,
        unique=True,
        index=True,
    )

    first_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    street: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    house_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    house_number_addition: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Columnas históricas en neerlandés; solo se leen como respaldo
    voornaam: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    achternaam: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    adres: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    huisnummer: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    huisnummer_toevoeging: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    postcode: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    stad: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    telefoon: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    geboortedatum: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<UserProfile id={self.id} user_id={self.user_id}>"


class AuthUser(Base):
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Columnas de primer nivel que algunos registros antiguos sí tienen
    first_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    naam: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    street: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    adres: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    user_metadata: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
        server_default="{}",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<AuthUser id={self.id}>"


__all__ = ["UserProfile", "AuthUser"]

# Fin del archivo app/modules/user_profile/models/user_profile_models.py
