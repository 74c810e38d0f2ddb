# -*- coding: utf-8 -*-
"""
app/modules/enrollments/models.py

Modelos ORM de programas e inscripciones.

Sincronizados con el esquema existente:
- programs: solo lectura desde la reconciliación
- inschrijvingen: UNIQUE(user_id, program_id), frontera de idempotencia

Autor: StudioHub
Fecha: 2026-10-14
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint, func, text
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base
from .enums import EnrollmentStatus


class Program(Base):
    """
    Programa (curso, workshop, trial) con capacidad opcional.

    - capacity NULL o 0: sin límite
    - manual_full_override: cierre manual del admin, ignora el conteo
    """

    __tablename__ = "programs"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    studio_id: Mapped[Optional[UUID]] = mapped_column(PG_UUID(as_uuid=True), nullable=True, index=True)
    title: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    waitlist_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false",
    )
    manual_full_override: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false",
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<Program id={self.id} capacity={self.capacity}>"


class Enrollment(Base):
    __tablename__ = "inschrijvingen"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False, index=True)
    program_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False, index=True)

    status: Mapped[EnrollmentStatus] = mapped_column(
        EnrollmentStatus.as_pg_enum(),
        nullable=False,
    )

    # {lesson_detail_type, lesson_detail_id, lesson_metadata, price_snapshot}
    form_data: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, default=dict, server_default=text("'{}'::jsonb"),
    )

    # Inmutable una vez adjuntado
    profile_snapshot: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONB, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "program_id", name="uq_inschrijvingen_user_id_program_id"),
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<Enrollment id={self.id} program={self.program_id} status={self.status}>"


__all__ = ["Program", "Enrollment"]

# Fin del archivo app/modules/enrollments/models.py
