# -*- coding: utf-8 -*-
"""
app/modules/enrollments/services/__init__.py

Autor: StudioHub
Fecha: 2026-10-14
"""

from .capacity_service import is_program_full, resolve_admission
from .enrollment_service import (
    EnrollmentReconciler,
    EnrollmentRequest,
    EnrollmentResult,
    ProgramNotFoundError,
)

__all__ = [
    "is_program_full",
    "resolve_admission",
    "EnrollmentReconciler",
    "EnrollmentRequest",
    "EnrollmentResult",
    "ProgramNotFoundError",
]
