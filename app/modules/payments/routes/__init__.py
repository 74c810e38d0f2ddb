# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/__init__.py

Ensamblador de rutas del módulo Payments.

Incluye:
- /payments/webhooks/stripe

Autor: StudioHub
Fecha: 2026-10-16
"""

from fastapi import APIRouter

from .webhooks_stripe import router as webhooks_stripe_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(webhooks_stripe_router, prefix="/payments")

__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/__init__.py
