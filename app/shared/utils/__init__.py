# -*- coding: utf-8 -*-
"""
app/shared/utils/__init__.py

Utilidades comunes.

Autor: StudioHub
Fecha: 2026-10-12
"""

from .datetime_helpers import add_months, ensure_utc, utcnow

__all__ = ["add_months", "ensure_utc", "utcnow"]
