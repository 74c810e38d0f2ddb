# -*- coding: utf-8 -*-
"""
app/shared/database/database.py

SQLAlchemy async + asyncpg contra el PostgreSQL hospedado de StudioHub.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Dependencia FastAPI: get_async_session
- context manager: session_scope()
- check_database_health()

Autor: StudioHub
Fecha: 2026-10-12
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config import settings
from app.shared.database.base import Base

logger = logging.getLogger(__name__)


def build_ssl_context(sslmode: str) -> Optional[ssl.SSLContext]:
    """
    Traduce DB_SSLMODE a un SSLContext para asyncpg.

    - disable: sin TLS
    - prefer: TLS sin verificación de certificado (entornos locales con certificados propios)
    - require: TLS con verificación estricta
    """
    mode = (sslmode or "").lower()
    if mode == "disable":
        return None
    if mode == "require":
        ctx = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
        ctx.check_hostname = True
        ctx.verify_mode = ssl.CERT_REQUIRED
        return ctx
    ctx = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


connect_args: dict = {
    # Compatible con poolers en modo transacción
    "statement_cache_size": 0,
    "command_timeout": float(settings.db_command_timeout_s),
    "server_settings": {"search_path": "public"},
}

ssl_context = build_ssl_context(settings.db_sslmode)
if ssl_context is not None:
    connect_args["ssl"] = ssl_context

engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    echo=bool(settings.db_echo_sql),
    connect_args=connect_args,
)

SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependencia FastAPI: una sesión por request, con rollback ante error."""
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """Context manager para scripts/tests; el commit queda a cargo del llamador."""
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (asyncio.TimeoutError, OSError, SQLAlchemyError) as e:
        logger.warning("[DB] health check failed: %s", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "session_scope",
    "check_database_health",
]
# Fin del archivo app/shared/database/database.py
