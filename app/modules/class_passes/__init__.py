# -*- coding: utf-8 -*-
"""
app/modules/class_passes/__init__.py

Class passes (paquetes de créditos prepagados) de StudioHub.

Autor: StudioHub
Fecha: 2026-10-14
"""

from .enums import ClassPassPurchaseStatus, LedgerReason
from .services import ClassPassGrant, CreditLedgerGranter

__all__ = [
    "ClassPassPurchaseStatus",
    "LedgerReason",
    "ClassPassGrant",
    "CreditLedgerGranter",
]
