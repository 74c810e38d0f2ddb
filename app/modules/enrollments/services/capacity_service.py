# -*- coding: utf-8 -*-
"""
app/modules/enrollments/services/capacity_service.py

Decisión de admisión para un (usuario, programa).

Reglas, en este orden:
0) El usuario ya tiene inscripción activa (replay del mismo evento) -> activo.
1) El usuario tiene waitlist_accepted -> activo, aunque el programa esté lleno.
2) is_full = manual_full_override OR (capacity > 0 AND activos >= capacity).
3) No lleno -> activo.
4) Lleno con lista de espera habilitada (y capacity > 0) -> lista de espera.
5) Lleno sin lista de espera -> bloqueo (revisión manual).

IMPORTANTE: el chequeo es consultivo. El conteo de activos se lee sin lock
y dos compras simultáneas del último lugar pueden ser admitidas ambas.
Una garantía dura requiere un mecanismo en la base de datos (fila de
asignación de lugar con UNIQUE o transacción SERIALIZABLE alrededor de
contar+insertar); este módulo no lo provee.

Autor: StudioHub
Fecha: 2026-10-14
"""

from typing import Optional

from app.modules.enrollments.enums import AdmissionDecision, EnrollmentStatus
from app.modules.enrollments.models import Program


def _has_capacity_limit(program: Program) -> bool:
    return program.capacity is not None and program.capacity > 0


def is_program_full(program: Program, active_count: int) -> bool:
    if program.manual_full_override:
        return True
    return _has_capacity_limit(program) and active_count >= program.capacity


def resolve_admission(
    program: Program,
    active_count: int,
    existing_status: Optional[EnrollmentStatus] = None,
) -> AdmissionDecision:
    """
    Decide admitir activo, en lista de espera o bloquear.

    Args:
        program: programa con capacity / waitlist_enabled / manual_full_override
        active_count: inscripciones activas actuales del programa
        existing_status: estado de la inscripción previa del usuario, si existe
    """
    if existing_status in (EnrollmentStatus.ACTIVE, EnrollmentStatus.WAITLIST_ACCEPTED):
        return AdmissionDecision.ADMIT_ACTIVE

    if not is_program_full(program, active_count):
        return AdmissionDecision.ADMIT_ACTIVE

    if program.waitlist_enabled and _has_capacity_limit(program):
        return AdmissionDecision.ADMIT_WAITLISTED

    return AdmissionDecision.BLOCK


__all__ = ["is_program_full", "resolve_admission"]

# Fin del archivo app/modules/enrollments/services/capacity_service.py
