# -*- coding: utf-8 -*-
"""
app/modules/user_profile/schemas/__init__.py

Autor: StudioHub
Fecha: 2026-10-13
"""

from .profile_snapshot_schemas import (
    ProfileSnapshot,
    REQUIRED_PROFILE_FIELDS,
    missing_profile_fields,
)

__all__ = ["ProfileSnapshot", "REQUIRED_PROFILE_FIELDS", "missing_profile_fields"]
