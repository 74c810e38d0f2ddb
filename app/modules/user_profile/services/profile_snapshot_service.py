# -*- coding: utf-8 -*-
"""
app/modules/user_profile/services/profile_snapshot_service.py

Resolución del snapshot de perfil del comprador.

Orden de búsqueda:
1) user_profiles (perfil normalizado), con las columnas neerlandesas como
   respaldo de cada campo
2) users: primero user_metadata con alias en inglés y luego en neerlandés,
   después las columnas de primer nivel del registro

Los datos históricos usan cualquiera de los dos nombres por campo, por eso
cada campo lógico tiene una lista de alias que se prueban en orden.

Autor: StudioHub
Fecha: 2026-10-13
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_profile.models import AuthUser, UserProfile
from app.modules.user_profile.repositories import AuthUserRepository, UserProfileRepository
from app.modules.user_profile.schemas import ProfileSnapshot

logger = logging.getLogger(__name__)


# Campo lógico -> alias en user_metadata y columnas de user_profiles
# (inglés primero, neerlandés después)
METADATA_ALIASES: dict[str, tuple[str, ...]] = {
    "first_name": ("first_name", "voornaam"),
    "last_name": ("last_name", "achternaam"),
    "street": ("street", "adres"),
    "house_number": ("house_number", "huisnummer"),
    "house_number_addition": ("house_number_addition", "huisnummer_toevoeging"),
    "postal_code": ("postal_code", "postcode"),
    "city": ("city", "stad"),
    "phone_number": ("phone_number", "telefoon"),
    "date_of_birth": ("date_of_birth", "geboortedatum"),
}

# Campo lógico -> columnas de primer nivel de `users` consultadas tras los alias
USER_COLUMN_FALLBACKS: dict[str, tuple[str, ...]] = {
    "first_name": ("first_name", "naam"),
    "last_name": ("last_name",),
    "street": ("street", "adres"),
    "city": ("city",),
    "phone_number": ("phone_number",),
}


def _first_present(values: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = values.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def snapshot_from_profile(profile: UserProfile) -> ProfileSnapshot:
    # Columna inglesa primero, columna histórica en neerlandés después
    columns = {
        name: getattr(profile, name, None)
        for aliases in METADATA_ALIASES.values()
        for name in aliases
    }
    fields = {
        field_name: _first_present(columns, aliases)
        for field_name, aliases in METADATA_ALIASES.items()
    }
    fields["email"] = _first_present({"email": profile.email}, ("email",))
    return ProfileSnapshot(**fields)


def snapshot_from_auth_user(user: AuthUser) -> ProfileSnapshot:
    metadata: Mapping[str, Any] = user.user_metadata or {}
    columns = {
        name: getattr(user, name, None)
        for keys in USER_COLUMN_FALLBACKS.values()
        for name in keys
    }

    fields: dict[str, Optional[str]] = {}
    for field_name, aliases in METADATA_ALIASES.items():
        value = _first_present(metadata, aliases)
        if value is None and field_name in USER_COLUMN_FALLBACKS:
            value = _first_present(columns, USER_COLUMN_FALLBACKS[field_name])
        fields[field_name] = value

    fields["email"] = _first_present({"email": user.email}, ("email",)) or _first_present(metadata, ("email",))
    return ProfileSnapshot(**fields)


class ProfileSnapshotResolver:
    """
    Construye el ProfileSnapshot de un usuario.

    Nunca lanza: ante cualquier fallo de lectura devuelve un snapshot vacío,
    que después el gate de perfil tratará como incompleto.
    """

    def __init__(
        self,
        profile_repo: Optional[UserProfileRepository] = None,
        user_repo: Optional[AuthUserRepository] = None,
    ) -> None:
        self.profile_repo = profile_repo or UserProfileRepository()
        self.user_repo = user_repo or AuthUserRepository()

    async def resolve(self, session: AsyncSession, user_id: UUID) -> ProfileSnapshot:
        # SAVEPOINT: un fallo de lectura no debe abortar la transacción exterior
        try:
            async with session.begin_nested():
                profile = await self.profile_repo.get_by_user_id(session, user_id)
                user = None
                if profile is None:
                    user = await self.user_repo.get_by_id(session, user_id)

            if profile is not None:
                return snapshot_from_profile(profile)
            if user is not None:
                logger.debug("profile_snapshot_fallback_to_users user=%s", str(user_id)[:8])
                return snapshot_from_auth_user(user)

            logger.warning("profile_snapshot_no_source user=%s", str(user_id)[:8])
        except Exception:
            logger.exception("profile_snapshot_failed user=%s", str(user_id)[:8])

        return ProfileSnapshot.empty()


__all__ = [
    "ProfileSnapshotResolver",
    "METADATA_ALIASES",
    "snapshot_from_profile",
    "snapshot_from_auth_user",
]

# Fin del archivo app/modules/user_profile/services/profile_snapshot_service.py
