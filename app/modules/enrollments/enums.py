# -*- coding: utf-8 -*-
"""
app/modules/enrollments/enums.py

Enums del módulo de inscripciones.

Los valores de EnrollmentStatus son los que ya existen en la tabla
inschrijvingen (mezcla histórica de neerlandés e inglés).

Autor: StudioHub
Fecha: 2026-10-14
"""

from enum import StrEnum
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM

from app.shared.database.base import as_pg_enum as _as_pg_enum


class EnrollmentStatus(StrEnum):
    """Estado de una inscripción. Sincronizado con: enrollment_status_enum."""

    ACTIVE = "actief"
    WAITLISTED = "waitlisted"
    WAITLIST_ACCEPTED = "waitlist_accepted"
    CANCELLED = "geannuleerd"

    __pg_enum_name__ = "enrollment_status_enum"

    @classmethod
    def as_pg_enum(
        cls,
        name: str = "enrollment_status_enum",
        schema: str | None = "public",
    ) -> PG_ENUM:
        return _as_pg_enum(cls, name=name, schema=schema)


class AdmissionDecision(StrEnum):
    """Resultado del resolvedor de capacidad para un (usuario, programa)."""

    ADMIT_ACTIVE = "admit_active"
    ADMIT_WAITLISTED = "admit_waitlisted"
    BLOCK = "block"


__all__ = ["EnrollmentStatus", "AdmissionDecision"]

# Fin del archivo app/modules/enrollments/enums.py
