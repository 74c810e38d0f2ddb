# -*- coding: utf-8 -*-
"""
app/modules/user_profile/__init__.py

Módulo de perfil de usuario de StudioHub.

Este módulo gestiona:
- Lectura del perfil normalizado (user_profiles) y del espejo del proveedor de identidad (users)
- Resolución de snapshots de perfil para inscripciones

Autor: StudioHub
Fecha: 2026-10-13
"""

from .schemas import ProfileSnapshot, REQUIRED_PROFILE_FIELDS, missing_profile_fields
from .services import ProfileSnapshotResolver

__all__ = [
    "ProfileSnapshot",
    "REQUIRED_PROFILE_FIELDS",
    "missing_profile_fields",
    "ProfileSnapshotResolver",
]
