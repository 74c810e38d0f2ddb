# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/__init__.py

Autor: StudioHub
Fecha: 2026-10-15
"""

from .webhook_metrics import (
    RECONCILIATION_ITEMS_TOTAL,
    WEBHOOKS_OUTCOME_TOTAL,
    WEBHOOKS_RECEIVED_TOTAL,
    WEBHOOKS_VERIFIED_TOTAL,
    inc_reconciliation_item,
    inc_webhook_outcome,
    inc_webhook_received,
    inc_webhook_verified,
)

__all__ = [
    "RECONCILIATION_ITEMS_TOTAL",
    "WEBHOOKS_OUTCOME_TOTAL",
    "WEBHOOKS_RECEIVED_TOTAL",
    "WEBHOOKS_VERIFIED_TOTAL",
    "inc_reconciliation_item",
    "inc_webhook_outcome",
    "inc_webhook_received",
    "inc_webhook_verified",
]
