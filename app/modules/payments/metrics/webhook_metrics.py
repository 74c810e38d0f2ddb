# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/webhook_metrics.py

Métricas Prometheus del webhook de Stripe y de la reconciliación.
Se registran en el registry por defecto, expuesto en /metrics.

Autor: StudioHub
Fecha: 2026-10-15
"""


from prometheus_client import Counter


WEBHOOKS_RECEIVED_TOTAL = Counter(
    "payments_webhook_received_total",
    "Total webhooks de Stripe recibidos",
)

# Separar verificación de outcome
WEBHOOKS_VERIFIED_TOTAL = Counter(
    "payments_webhook_verified_total",
    "Total webhooks por resultado de verificación",
    ["result"],  # verified/unsigned/rejected/misconfigured
)
WEBHOOKS_OUTCOME_TOTAL = Counter(
    "payments_webhook_outcome_total",
    "Total webhooks por outcome (handled/ignored/unsigned/invalid/error)",
    ["outcome"],
)
RECONCILIATION_ITEMS_TOTAL = Counter(
    "payments_reconciliation_items_total",
    "Resultados por ítem de la reconciliación",
    ["kind", "status"],
)


def inc_webhook_received() -> None:
    WEBHOOKS_RECEIVED_TOTAL.inc()


def inc_webhook_verified(result: str) -> None:
    WEBHOOKS_VERIFIED_TOTAL.labels(result=result).inc()


def inc_webhook_outcome(outcome: str) -> None:
    WEBHOOKS_OUTCOME_TOTAL.labels(outcome=outcome).inc()


def inc_reconciliation_item(kind: str, status: str) -> None:
    RECONCILIATION_ITEMS_TOTAL.labels(kind=kind, status=status).inc()


__all__ = [
    "WEBHOOKS_RECEIVED_TOTAL",
    "WEBHOOKS_VERIFIED_TOTAL",
    "WEBHOOKS_OUTCOME_TOTAL",
    "RECONCILIATION_ITEMS_TOTAL",
    "inc_webhook_received",
    "inc_webhook_verified",
    "inc_webhook_outcome",
    "inc_reconciliation_item",
]

# Fin del archivo app/modules/payments/metrics/webhook_metrics.py
