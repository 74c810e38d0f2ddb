# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/results.py

Resultados tipados de la reconciliación.

Cada ítem (inscripción, class pass, cierre de carrito) produce un
ItemOutcome; el orquestador los agrega en un ReconciliationReport que
la ruta devuelve en la respuesta 200.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Optional
from uuid import UUID


class ItemKind(StrEnum):
    ENROLLMENT = "enrollment"
    CLASS_PASS = "class_pass"
    CART = "cart"


class ItemStatus(StrEnum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ItemOutcome:
    kind: ItemKind
    status: ItemStatus
    reason: Optional[str] = None
    program_id: Optional[UUID] = None
    enrollment_id: Optional[UUID] = None
    purchase_id: Optional[UUID] = None
    detail: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value, "status": self.status.value}
        if self.reason:
            data["reason"] = self.reason
        for name in ("program_id", "enrollment_id", "purchase_id"):
            value = getattr(self, name)
            if value is not None:
                data[name] = str(value)
        if self.detail:
            data["detail"] = self.detail
        return data


@dataclass
class ReconciliationReport:
    event_id: str
    event_type: str
    handled: bool = True
    reason: Optional[str] = None
    purchase_kind: Optional[str] = None
    user_id: Optional[UUID] = None
    transaction_status: Optional[str] = None
    items: list[ItemOutcome] = field(default_factory=list)

    def add(self, outcome: ItemOutcome) -> ItemOutcome:
        self.items.append(outcome)
        return outcome

    def by_status(self, status: ItemStatus) -> list[ItemOutcome]:
        return [item for item in self.items if item.status is status]

    @property
    def has_failures(self) -> bool:
        return any(item.status is ItemStatus.FAILED for item in self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "handled": self.handled,
            "reason": self.reason,
            "purchase_kind": self.purchase_kind,
            "user_id": str(self.user_id) if self.user_id else None,
            "transaction_status": self.transaction_status,
            "items": [item.to_dict() for item in self.items],
        }


__all__ = ["ItemKind", "ItemStatus", "ItemOutcome", "ReconciliationReport"]

# Fin del archivo app/modules/payments/facades/webhooks/results.py
