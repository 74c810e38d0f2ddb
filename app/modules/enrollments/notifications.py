# -*- coding: utf-8 -*-
"""
app/modules/enrollments/notifications.py

Notificación al estudio cuando una inscripción queda activa.

El contenido y el canal de entrega viven fuera de este servicio; aquí solo
se define el contrato y una implementación por defecto que registra el envío.
Cualquier fallo del notificador se registra y se descarta.

Autor: StudioHub
Fecha: 2026-10-14
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol
from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnrollmentNotification:
    studio_id: UUID
    program_id: UUID
    enrollment_id: UUID
    enrolled_user_id: UUID
    profile_snapshot: dict[str, Any]
    program_title: Optional[str] = None


class EnrollmentNotifier(Protocol):
    async def notify_enrollment(self, notification: EnrollmentNotification) -> None: ...


class LoggingEnrollmentNotifier:
    """Notificador por defecto: deja constancia en el log."""

    async def notify_enrollment(self, notification: EnrollmentNotification) -> None:
        logger.info(
            "enrollment_notification studio=%s program=%s enrollment=%s user=%s",
            notification.studio_id,
            notification.program_id,
            notification.enrollment_id,
            str(notification.enrolled_user_id)[:8],
        )


async def dispatch_enrollment_notification(
    notifier: Optional[EnrollmentNotifier],
    notification: EnrollmentNotification,
) -> bool:
    """
    Envía la notificación sin propagar errores.

    Returns:
        True si el notificador terminó sin excepción
    """
    if notifier is None:
        return False
    try:
        await notifier.notify_enrollment(notification)
        return True
    except Exception:
        logger.exception(
            "enrollment_notification_failed program=%s enrollment=%s",
            notification.program_id, notification.enrollment_id,
        )
        return False


__all__ = [
    "EnrollmentNotification",
    "EnrollmentNotifier",
    "LoggingEnrollmentNotifier",
    "dispatch_enrollment_notification",
]

# Fin del archivo app/modules/enrollments/notifications.py
