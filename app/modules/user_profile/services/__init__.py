# -*- coding: utf-8 -*-
"""
app/modules/user_profile/services/__init__.py

Autor: StudioHub
Fecha: 2026-10-13
"""

from .profile_snapshot_service import ProfileSnapshotResolver

__all__ = ["ProfileSnapshotResolver"]
