# -*- coding: utf-8 -*-
"""
app/modules/enrollments/repositories.py

Repositorios para programas e inscripciones.

Autor: StudioHub
Fecha: 2026-10-14
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.utils.datetime_helpers import utcnow
from .enums import EnrollmentStatus
from .models import Enrollment, Program

logger = logging.getLogger(__name__)


class ProgramRepository:
    """Lectura de programas (la reconciliación nunca los modifica)."""

    async def get_by_id(
        self,
        session: AsyncSession,
        program_id: UUID,
    ) -> Optional[Program]:
        return await session.get(Program, program_id)


class EnrollmentRepository:
    """Repositorio de inschrijvingen."""

    async def count_active(
        self,
        session: AsyncSession,
        program_id: UUID,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(Enrollment)
            .where(
                Enrollment.program_id == program_id,
                Enrollment.status == EnrollmentStatus.ACTIVE,
            )
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def get_status(
        self,
        session: AsyncSession,
        user_id: UUID,
        program_id: UUID,
    ) -> Optional[EnrollmentStatus]:
        stmt = select(Enrollment.status).where(
            Enrollment.user_id == user_id,
            Enrollment.program_id == program_id,
        )
        result = await session.execute(stmt)
        status = result.scalar_one_or_none()
        return EnrollmentStatus(status) if status is not None else None

    async def upsert(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        program_id: UUID,
        status: EnrollmentStatus,
        form_data: dict[str, Any],
        profile_snapshot: dict[str, Any],
    ) -> UUID:
        """
        INSERT ... ON CONFLICT (user_id, program_id) DO UPDATE.

        Una entrega repetida del mismo evento actualiza la fila existente en
        lugar de fallar por clave duplicada. El profile_snapshot ya adjuntado
        se conserva.

        Returns:
            id de la inscripción (nueva o existente)
        """
        now = utcnow()
        stmt = pg_insert(Enrollment).values(
            user_id=user_id,
            program_id=program_id,
            status=status,
            form_data=form_data,
            profile_snapshot=profile_snapshot,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Enrollment.user_id, Enrollment.program_id],
            set_={
                "status": stmt.excluded.status,
                "form_data": stmt.excluded.form_data,
                "profile_snapshot": func.coalesce(
                    Enrollment.profile_snapshot,
                    stmt.excluded.profile_snapshot,
                ),
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(Enrollment.id)

        result = await session.execute(stmt)
        enrollment_id = result.scalar_one()

        logger.debug(
            "enrollment_upserted id=%s program=%s status=%s",
            enrollment_id, program_id, status.value,
        )
        return enrollment_id


__all__ = ["ProgramRepository", "EnrollmentRepository"]

# Fin del archivo app/modules/enrollments/repositories.py
