# -*- coding: utf-8 -*-
"""
app/modules/enrollments/__init__.py

Módulo de inscripciones (inschrijvingen) de StudioHub.

Incluye:
- Programas con capacidad, lista de espera y cierre manual
- Decisión de admisión (activo / lista de espera / bloqueo)
- Upsert idempotente de inscripciones por (usuario, programa)
- Notificación best-effort al estudio por inscripción activa

Autor: StudioHub
Fecha: 2026-10-14
"""

from .enums import AdmissionDecision, EnrollmentStatus

__all__ = ["AdmissionDecision", "EnrollmentStatus"]
