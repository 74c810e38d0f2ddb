# -*- coding: utf-8 -*-
"""
app/core/logging.py

Configuración centralizada de logging para StudioHub.
Actúa como fachada de `app.shared.config.logging_config`.

Autor: StudioHub
Fecha: 2026-10-12
"""

from typing import Literal

from app.shared.config.logging_config import setup_logging as _setup_logging


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: Formato de salida (plain, pretty, json).
    """
    _setup_logging(level=level, fmt=fmt)

# Fin del archivo app/core/logging.py
