# -*- coding: utf-8 -*-
"""
app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: StudioHub
Fecha: 2026-10-12
"""

from __future__ import annotations

from .database import (
    engine,
    SessionLocal,
    get_async_session,
    session_scope,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION, as_pg_enum

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "NAMING_CONVENTION",
    "as_pg_enum",
    "get_async_session",
    "session_scope",
    "check_database_health",
]

# Fin del archivo app/shared/database/__init__.py
