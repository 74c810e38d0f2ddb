# -*- coding: utf-8 -*-
"""
app/modules/class_passes/enums.py

Enums para class passes y su ledger de créditos.

Autor: StudioHub
Fecha: 2026-10-14
"""

from enum import Enum


class ClassPassPurchaseStatus(str, Enum):
    PAID = "paid"


class LedgerReason(str, Enum):
    """
    Motivo de un movimiento del ledger.

    PURCHASE abona los créditos de una compra (delta > 0), una sola vez por compra.
    ENROLLMENT consume créditos al inscribirse (delta < 0); lo escribe el flujo de inscripción.
    """
    PURCHASE = "purchase"
    ENROLLMENT = "enrollment"


__all__ = ["ClassPassPurchaseStatus", "LedgerReason"]
