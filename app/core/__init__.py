# -*- coding: utf-8 -*-
"""
app/core/__init__.py

Fachada unificada para componentes centrales del backend StudioHub:
- Configuración (settings)
- Logging
- Motor de base de datos y sesiones

Esta capa envuelve la implementación existente en `app.shared.*` para
ofrecer puntos de entrada estables hacia el resto de los módulos.

Autor: StudioHub
Fecha: 2026-10-12
"""

from .settings import get_settings
from .logging import setup_logging
from .db import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    session_scope,
    check_database_health,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "session_scope",
    "check_database_health",
]

# Fin del archivo app/core/__init__.py
