# -*- coding: utf-8 -*-
"""
app/shared/__init__.py

Infraestructura compartida de StudioHub (configuración, base de datos, utilidades).

Expone un único import estable:
    from app.shared import get_settings

No inicializa settings en import-time para evitar efectos colaterales
durante la recolección de tests.

Autor: StudioHub
Fecha: 2026-10-12
"""

from app.shared.config.config_loader import get_settings

__all__ = ["get_settings"]
# Fin del archivo app/shared/__init__.py
