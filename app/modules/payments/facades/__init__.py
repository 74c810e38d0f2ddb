# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/__init__.py

Fachadas del módulo Payments.

Autor: StudioHub
Fecha: 2026-10-15
"""
