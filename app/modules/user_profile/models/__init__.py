# -*- coding: utf-8 -*-
"""
app/modules/user_profile/models/__init__.py

Modelos del módulo de perfil de usuario.

Autor: StudioHub
Fecha: 2026-10-13
"""

from .user_profile_models import AuthUser, UserProfile

__all__ = ["AuthUser", "UserProfile"]
