# -*- coding: utf-8 -*-
"""
app/modules/enrollments/services/enrollment_service.py

Reconciliador de inscripciones: aplica la decisión de capacidad y
hace upsert de la inscripción por (usuario, programa).

El gate de perfil incompleto se evalúa antes, una vez por evento, en el
orquestador del webhook; aquí solo llegan compradores con perfil completo.

Autor: StudioHub
Fecha: 2026-10-14
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.enrollments.enums import AdmissionDecision, EnrollmentStatus
from app.modules.enrollments.models import Program
from app.modules.enrollments.repositories import EnrollmentRepository, ProgramRepository
from app.modules.user_profile.schemas import ProfileSnapshot
from .capacity_service import resolve_admission

logger = logging.getLogger(__name__)


class ProgramNotFoundError(LookupError):
    """El programa referenciado por el checkout no existe."""


@dataclass(frozen=True)
class EnrollmentRequest:
    """Un programa a inscribir, con los datos de la línea del carrito."""

    program_id: UUID
    price_snapshot: Optional[Decimal] = None
    lesson_detail_type: Optional[str] = None
    lesson_detail_id: Optional[str] = None
    lesson_metadata: Optional[dict[str, Any]] = None

    def form_data(self) -> dict[str, Any]:
        return {
            "lesson_detail_type": self.lesson_detail_type or None,
            "lesson_detail_id": self.lesson_detail_id or None,
            "lesson_metadata": self.lesson_metadata or None,
            "price_snapshot": float(self.price_snapshot) if self.price_snapshot is not None else None,
        }


@dataclass
class EnrollmentResult:
    decision: AdmissionDecision
    program: Program
    enrollment_id: Optional[UUID] = None
    status: Optional[EnrollmentStatus] = None
    newly_active: bool = False


class EnrollmentReconciler:
    """
    Orquesta capacidad + upsert para un único programa.

    Un bloqueo no escribe fila; el llamador registra el programa bloqueado
    en la transacción como needs_manual_review_full.
    """

    def __init__(
        self,
        program_repo: Optional[ProgramRepository] = None,
        enrollment_repo: Optional[EnrollmentRepository] = None,
    ) -> None:
        self.program_repo = program_repo or ProgramRepository()
        self.enrollment_repo = enrollment_repo or EnrollmentRepository()

    async def reconcile(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        request: EnrollmentRequest,
        snapshot: ProfileSnapshot,
    ) -> EnrollmentResult:
        program = await self.program_repo.get_by_id(session, request.program_id)
        if program is None:
            raise ProgramNotFoundError(f"program {request.program_id} not found")

        existing = await self.enrollment_repo.get_status(session, user_id, program.id)
        active_count = await self.enrollment_repo.count_active(session, program.id)
        decision = resolve_admission(program, active_count, existing)

        logger.info(
            "admission_decided program=%s user=%s active=%d capacity=%s existing=%s decision=%s",
            program.id, str(user_id)[:8], active_count, program.capacity,
            existing.value if existing else None, decision.value,
        )

        if decision is AdmissionDecision.BLOCK:
            return EnrollmentResult(decision=decision, program=program)

        status = (
            EnrollmentStatus.ACTIVE
            if decision is AdmissionDecision.ADMIT_ACTIVE
            else EnrollmentStatus.WAITLISTED
        )
        enrollment_id = await self.enrollment_repo.upsert(
            session,
            user_id=user_id,
            program_id=program.id,
            status=status,
            form_data=request.form_data(),
            profile_snapshot=snapshot.to_json(),
        )

        return EnrollmentResult(
            decision=decision,
            program=program,
            enrollment_id=enrollment_id,
            status=status,
            newly_active=status is EnrollmentStatus.ACTIVE and existing is not EnrollmentStatus.ACTIVE,
        )


__all__ = [
    "EnrollmentReconciler",
    "EnrollmentRequest",
    "EnrollmentResult",
    "ProgramNotFoundError",
]

# Fin del archivo app/modules/enrollments/services/enrollment_service.py
