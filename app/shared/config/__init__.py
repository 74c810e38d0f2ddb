# -*- coding: utf-8 -*-
"""
app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings

La instancia real se resuelve de forma perezosa vía config_loader.get_settings(),
para no validar variables de entorno al importar (útil en tests).

Autor: StudioHub
Fecha: 2026-10-12
"""

from __future__ import annotations

from typing import Any

from .config_loader import get_settings
from .settings_payments import PaymentsSettings, get_payments_settings


class _LazySettings:
    """Proxy que delega cada atributo a get_settings() en el momento del acceso."""

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)


settings = _LazySettings()

__all__ = ["settings", "get_settings", "PaymentsSettings", "get_payments_settings"]
# Fin del archivo app/shared/config/__init__.py
