# -*- coding: utf-8 -*-
"""
app/modules/user_profile/repositories/user_profile_repository.py

Repositorios de solo lectura para user_profiles y users.

Autor: StudioHub
Fecha: 2026-10-13
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_profile.models import AuthUser, UserProfile


class UserProfileRepository:

    async def get_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Optional[UserProfile]:
        stmt = select(UserProfile).where(UserProfile.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_user_id_by_profile_id(
        self,
        session: AsyncSession,
        profile_id: UUID,
    ) -> Optional[UUID]:
        """Indirección user_profile_id -> user_id usada por el checkout."""
        stmt = select(UserProfile.user_id).where(UserProfile.id == profile_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class AuthUserRepository:

    async def get_by_id(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Optional[AuthUser]:
        return await session.get(AuthUser, user_id)

# Fin del archivo app/modules/user_profile/repositories/user_profile_repository.py
