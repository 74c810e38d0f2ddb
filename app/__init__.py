# -*- coding: utf-8 -*-
"""
app/__init__.py

Paquete principal 'app' del backend de StudioHub (reconciliación de pagos).

Autor: StudioHub
Fecha: 2026-10-12
"""

# Fin del archivo app/__init__.py
