# -*- coding: utf-8 -*-
"""
app/modules/payments/__init__.py

Módulo Payments de StudioHub: reconciliación de eventos de pago de Stripe.

Componentes:
- routes: POST /payments/webhooks/stripe
- facades/webhooks: verificación, normalización y orquestación del evento
- services: actualización de estado de stripe_transactions
- adapters: enriquecimiento best-effort con la API de Stripe

Autor: StudioHub
Fecha: 2026-10-15
"""
