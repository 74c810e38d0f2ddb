# -*- coding: utf-8 -*-
"""
tests/conftest.py

Config global de tests para StudioHub.

- Variables de entorno mínimas ANTES de importar la app
- App FastAPI y cliente httpx (ASGITransport + asgi-lifespan)
- Sesión fake y mundo de repositorios en memoria para la reconciliación
- Motor PostgreSQL real (pg_engine / adb) para los repositorios SQL;
  se omite si no hay TEST_DATABASE_URL

Autor: StudioHub
Fecha: 2026-10-17
"""

import os
from collections.abc import AsyncIterator

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# -----------------------------------------------------------------------------
# 0) Variables mínimas de entorno
# -----------------------------------------------------------------------------
os.environ.setdefault("PYTHON_ENV", "test")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from tests.fakes import FakeSession, ReconciliationWorld


# -----------------------------------------------------------------------------
# 1) App FastAPI y cliente httpx (httpx>=0.28, con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture(scope="session")
def app():
    """Carga la aplicación principal **después** de setear env vars."""
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    app.dependency_overrides.clear()


# -----------------------------------------------------------------------------
# 2) Reconciliación en memoria
# -----------------------------------------------------------------------------
@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def world() -> ReconciliationWorld:
    return ReconciliationWorld()


# -----------------------------------------------------------------------------
# 3) PostgreSQL real para los repositorios (integración)
# -----------------------------------------------------------------------------
def _pick_pg_url() -> str:
    raw = os.getenv("TEST_DATABASE_URL") or ""
    if not raw:
        return ""
    return (
        raw.replace("postgres://", "postgresql+asyncpg://", 1)
        .replace("postgresql://", "postgresql+asyncpg://", 1)
    )


def _create_schema(sync_conn) -> None:
    """Crea los ENUM (create_type=False en los modelos) y después las tablas."""
    from app.shared.database.base import Base
    import app.modules.class_passes.models  # noqa: F401
    import app.modules.enrollments.models  # noqa: F401
    import app.modules.payments.models  # noqa: F401
    import app.modules.user_profile.models  # noqa: F401

    for table in Base.metadata.sorted_tables:
        for column in table.columns:
            if isinstance(column.type, postgresql.ENUM):
                column.type.create(sync_conn, checkfirst=True)
    Base.metadata.create_all(sync_conn, checkfirst=True)


@pytest.fixture
async def pg_engine():
    """
    Motor async PostgreSQL para tests de repositorios.
    - Requiere TEST_DATABASE_URL (una base desechable: se crean tablas)
    - asyncpg sin cache de prepared statements (poolers en modo transacción)
    """
    url = _pick_pg_url()
    if not url:
        pytest.skip("Define TEST_DATABASE_URL para los tests de repositorios.")

    eng = create_async_engine(
        url,
        poolclass=NullPool,
        connect_args={"statement_cache_size": 0},
    )
    async with eng.begin() as conn:
        await conn.run_sync(_create_schema)

    yield eng
    await eng.dispose()


@pytest.fixture
async def adb(pg_engine) -> AsyncIterator[AsyncSession]:
    """Sesión sobre PostgreSQL; todo se revierte al terminar el test."""
    SessionLocal = async_sessionmaker(pg_engine, expire_on_commit=False, class_=AsyncSession)
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()


# Fin del archivo tests/conftest.py
