# -*- coding: utf-8 -*-
"""
app/shared/utils/datetime_helpers.py

Utilidades para manejo consistente de timestamps UTC.

Autor: StudioHub
Fecha: 2026-10-12
"""

import calendar
from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Retorna el timestamp UTC actual (timezone-aware).

    Examples:
        >>> utcnow().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Asegura que un datetime sea UTC timezone-aware (naive se asume UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    if dt.tzinfo != timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def add_months(dt: datetime, months: int) -> datetime:
    """
    Suma N meses calendario conservando la hora.

    Si el día no existe en el mes destino se ajusta al último día del mes.

    Examples:
        >>> add_months(datetime(2026, 1, 31, tzinfo=timezone.utc), 1).day
        28
        >>> add_months(datetime(2026, 11, 15), 3).year
        2027
    """
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


__all__ = ["utcnow", "ensure_utc", "add_months"]
# Fin del archivo app/shared/utils/datetime_helpers.py
