# -*- coding: utf-8 -*-
"""
app/shared/config/settings_payments.py

Configuración de pagos y webhooks de Stripe para StudioHub.

Descripción:
    Centraliza credenciales de Stripe, la política para webhooks sin firma,
    el timeout de consulta de detalles de pago y el toggle de notificaciones
    de inscripción.

Autor: StudioHub
Fecha: 2026-10-12
"""

from __future__ import annotations

import os
from typing import Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


UnsignedWebhookPolicy = Literal["acknowledge", "reject"]


class PaymentsSettings(BaseSettings):
    """Configuración del reconciliador de eventos de pago."""

    # =========================================================================
    # STRIPE
    # =========================================================================

    stripe_secret_key: Optional[str] = Field(
        default=None,
        description="Stripe secret key (sk_live_... o sk_test_...)"
    )

    stripe_webhook_secret: Optional[str] = Field(
        default=None,
        description="Stripe webhook signing secret (whsec_...)"
    )

    stripe_webhook_tolerance_seconds: int = Field(
        default=300,
        description="Tolerancia para validación de timestamp de webhooks Stripe (5 minutos)"
    )

    @field_validator("stripe_secret_key", mode="before")
    @classmethod
    def _load_stripe_secret_key(cls, v: Optional[str]) -> Optional[str]:
        """Fallback a STRIPE_SECRET_KEY env var si no está en settings."""
        if v:
            return v
        return os.getenv("STRIPE_SECRET_KEY")

    @field_validator("stripe_webhook_secret", mode="before")
    @classmethod
    def _load_stripe_webhook_secret(cls, v: Optional[str]) -> Optional[str]:
        """Fallback a STRIPE_WEBHOOK_SECRET env var si no está en settings."""
        if v:
            return v
        return os.getenv("STRIPE_WEBHOOK_SECRET")

    # =========================================================================
    # WEBHOOKS
    # =========================================================================

    unsigned_webhook_policy: UnsignedWebhookPolicy = Field(
        default="acknowledge",
        validation_alias="PAYMENTS_UNSIGNED_WEBHOOK_POLICY",
        description=(
            "Qué hacer con requests sin header Stripe-Signature: "
            "'acknowledge' responde 200 sin procesar, 'reject' responde 400"
        ),
    )

    payment_details_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout para consultar detalles del PaymentIntent en Stripe"
    )

    # =========================================================================
    # NOTIFICACIONES
    # =========================================================================

    enrollment_notifications_enabled: bool = Field(
        default=True,
        description="Enviar notificación al estudio cuando una inscripción queda activa"
    )

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


def reset_payments_settings() -> None:
    """Descarta el singleton (usado por tests que cambian variables de entorno)."""
    global _payments_settings
    _payments_settings = None


__all__ = [
    "PaymentsSettings",
    "UnsignedWebhookPolicy",
    "get_payments_settings",
    "reset_payments_settings",
]
# Fin del archivo app/shared/config/settings_payments.py
