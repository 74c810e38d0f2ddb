# -*- coding: utf-8 -*-
"""
app/core/db.py

Fachada para la capa de acceso a datos basada en SQLAlchemy async.
Envuelve `app.shared.database` para exponer:

- engine
- SessionLocal
- Base
- get_async_session
- session_scope()
- check_database_health()

Autor: StudioHub
Fecha: 2026-10-12
"""

from app.shared.database import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    session_scope,
    check_database_health,
)


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "session_scope",
    "check_database_health",
]

# Fin del archivo app/core/db.py
