# -*- coding: utf-8 -*-
"""
app/observability/__init__.py

Observabilidad Prometheus del backend.

Autor: StudioHub
Fecha: 2026-10-16
"""

from .prom import setup_observability

__all__ = ["setup_observability"]
