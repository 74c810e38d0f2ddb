# -*- coding: utf-8 -*-
"""
app/modules/user_profile/schemas/profile_snapshot_schemas.py

Snapshot de perfil que se adjunta a cada inscripción.

El snapshot es una copia plana de los datos de contacto/identidad del
comprador en el momento de la reconciliación. Se usa:
- como gate: sin los campos obligatorios no se inscribe
- como copia de auditoría, independiente de ediciones posteriores del perfil

Autor: StudioHub
Fecha: 2026-10-13
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


# Campos sin los cuales no se completa una inscripción
REQUIRED_PROFILE_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "street",
    "house_number",
    "postal_code",
    "city",
    "date_of_birth",
)


class ProfileSnapshot(BaseModel):
    """Copia inmutable de datos personales; todos los campos son opcionales."""

    model_config = ConfigDict(frozen=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    house_number_addition: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_missing(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @classmethod
    def empty(cls) -> "ProfileSnapshot":
        return cls()

    def to_json(self) -> dict[str, Optional[str]]:
        """Forma en la que se persiste en inschrijvingen.profile_snapshot."""
        return self.model_dump(mode="json")


def missing_profile_fields(snapshot: ProfileSnapshot) -> list[str]:
    """
    Lista de campos obligatorios ausentes, en el orden de REQUIRED_PROFILE_FIELDS.

    >>> missing_profile_fields(ProfileSnapshot(first_name="Ana"))[:2]
    ['last_name', 'email']
    """
    return [name for name in REQUIRED_PROFILE_FIELDS if not getattr(snapshot, name)]


__all__ = ["ProfileSnapshot", "REQUIRED_PROFILE_FIELDS", "missing_profile_fields"]

# Fin del archivo app/modules/user_profile/schemas/profile_snapshot_schemas.py
