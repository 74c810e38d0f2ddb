# -*- coding: utf-8 -*-
"""
app/modules/user_profile/repositories/__init__.py

Autor: StudioHub
Fecha: 2026-10-13
"""

from .user_profile_repository import AuthUserRepository, UserProfileRepository

__all__ = ["AuthUserRepository", "UserProfileRepository"]
