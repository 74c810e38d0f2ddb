# -*- coding: utf-8 -*-
"""
app/main.py

Punto de entrada principal del backend de StudioHub.

Ajustes clave:
- Uso de app.core.settings como fachada de configuración
- Logging configurado una sola vez desde settings (plain/json)
- Observabilidad Prometheus (/metrics) vía app.observability.prom
- Health principal /health y webhook /payments/webhooks/stripe vía app.routes
- Cierre ordenado del engine en shutdown

Autor: StudioHub
Fecha: 2026-10-16
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que use os.getenv
# Fuera de producción .env manda sobre las variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV != "production")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import get_settings
from app.core.logging import setup_logging
from app.core.db import engine
from app.observability.prom import setup_observability
from app.routes import router as api_router

settings = get_settings()
setup_logging(level=settings.log_level, fmt=settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    logger.info(
        "backend_started app=%s version=%s env=%s",
        settings.app_name, settings.app_version, settings.python_env,
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        await engine.dispose()
        logger.info("backend_stopped app=%s", settings.app_name)


openapi_tags = [
    {"name": "payments:webhooks", "description": "Webhooks de Stripe y reconciliación de pagos"},
]

app = FastAPI(
    title=f"{settings.app_name} API",
    description="Reconciliación de pagos de StudioHub",
    version=settings.app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
)

# IMPORTANTE: el orden real de ejecución de middlewares en Starlette es inverso al registro.
# Registramos CORS AL FINAL para que se ejecute PRIMERO (outermost).
setup_observability(app, http_metrics=settings.http_metrics_enabled)

_cors_origins = settings.get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    # "*" con allow_credentials=True es inválido en navegadores
    allow_credentials=_cors_origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_dev,
    )

# Fin del archivo app/main.py
