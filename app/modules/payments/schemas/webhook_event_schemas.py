# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/webhook_event_schemas.py

Unión etiquetada de eventos de Stripe y de la metadata de compra.

Eventos:
- CheckoutSessionCompletedEvent: el único tipo que dispara reconciliación
- IgnoredEvent: cualquier otro tipo (product.*, price.*, ...) se reconoce y se ignora

Metadata de la Checkout Session (valores siempre string en Stripe; "" = ausente),
en orden de prioridad:
1) ClassPassMetadata: class_pass_product_id + studio_id + credit_count (+ expiration_months)
2) CartMetadata: cart_id
3) SingleProgramMetadata: program_id
4) UnknownMetadata
`user_profile_id` es común a todas las variantes; un valor que no es UUID
se trata como ausente.

Si la variante elegida no valida (p. ej. class pass sin studio_id) la
metadata se degrada a InvalidMetadata con los errores: el evento se
reconoce y el orquestador registra el ítem como omitido. Solo un sobre
estructuralmente roto (sin id/type/data.object) es un error de payload.

Autor: StudioHub
Fecha: 2026-10-15
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


# ---------------------------------------------------------------------------
# Metadata de compra
# ---------------------------------------------------------------------------

class _PurchaseMetadataBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    user_profile_id: Optional[UUID] = None

    @field_validator("user_profile_id", mode="before")
    @classmethod
    def _lenient_profile_id(cls, v: Any) -> Optional[UUID]:
        # Referencia de respaldo: si no es un UUID se ignora
        if v is None or isinstance(v, UUID):
            return v
        try:
            return UUID(str(v).strip())
        except ValueError:
            return None


class ClassPassMetadata(_PurchaseMetadataBase):
    kind: Literal["class_pass"] = "class_pass"
    class_pass_product_id: UUID
    studio_id: UUID
    credit_count: int = Field(ge=0)
    expiration_months: Optional[int] = Field(default=None, ge=0)


class CartMetadata(_PurchaseMetadataBase):
    kind: Literal["cart"] = "cart"
    cart_id: UUID


class SingleProgramMetadata(_PurchaseMetadataBase):
    kind: Literal["program"] = "program"
    program_id: UUID


class UnknownMetadata(_PurchaseMetadataBase):
    kind: Literal["unknown"] = "unknown"


class InvalidMetadata(_PurchaseMetadataBase):
    """Metadata con forma de compra reconocida pero que no valida."""

    kind: Literal["invalid"] = "invalid"
    intended_kind: str
    errors: tuple[str, ...] = ()


PurchaseMetadata = Annotated[
    Union[ClassPassMetadata, CartMetadata, SingleProgramMetadata, UnknownMetadata, InvalidMetadata],
    Field(discriminator="kind"),
]

_purchase_metadata_adapter: TypeAdapter[Any] = TypeAdapter(PurchaseMetadata)


def _clean_metadata(raw: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Recorta strings y descarta los vacíos (Stripe no admite null en metadata)."""
    cleaned: dict[str, Any] = {}
    for key, value in (raw or {}).items():
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if value is None:
            continue
        cleaned[str(key)] = value
    return cleaned


def _classify(cleaned: dict[str, Any]) -> str:
    if "class_pass_product_id" in cleaned:
        return "class_pass"
    if "cart_id" in cleaned:
        return "cart"
    if "program_id" in cleaned:
        return "program"
    return "unknown"


def _error_summary(exc: ValidationError) -> tuple[str, ...]:
    return tuple(
        f"{err['loc'][-1]}: {err['msg']}" if err["loc"] else err["msg"]
        for err in exc.errors()
    )


def parse_purchase_metadata(raw: Optional[Mapping[str, Any]]) -> PurchaseMetadata:
    """
    Convierte la metadata cruda de la sesión en su variante tipada.

    Nunca lanza por contenido: una variante que no valida se devuelve como
    InvalidMetadata con el resumen de errores.
    """
    cleaned = _clean_metadata(raw)
    kind = _classify(cleaned)
    try:
        return _purchase_metadata_adapter.validate_python({**cleaned, "kind": kind})
    except ValidationError as e:
        return InvalidMetadata(
            intended_kind=kind,
            errors=_error_summary(e),
            user_profile_id=cleaned.get("user_profile_id"),
        )


# ---------------------------------------------------------------------------
# Eventos
# ---------------------------------------------------------------------------

class CheckoutSession(BaseModel):
    """Subconjunto de la Checkout Session que usa la reconciliación."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    payment_intent: Optional[str] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    metadata: PurchaseMetadata = Field(default_factory=UnknownMetadata)

    @field_validator("payment_intent", mode="before")
    @classmethod
    def _payment_intent_id(cls, v: Any) -> Optional[str]:
        # Puede venir expandido como objeto
        if isinstance(v, Mapping):
            return v.get("id")
        return v or None

    @field_validator("metadata", mode="before")
    @classmethod
    def _typed_metadata(cls, v: Any) -> Any:
        if isinstance(v, _PurchaseMetadataBase):
            return v
        if v is not None and not isinstance(v, Mapping):
            raise ValueError("metadata must be an object")
        return parse_purchase_metadata(v)


class _CheckoutSessionData(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    checkout_session: CheckoutSession = Field(alias="object")


class CheckoutSessionCompletedEvent(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    type: Literal["checkout.session.completed"]
    account: Optional[str] = None
    livemode: bool = False
    data: _CheckoutSessionData

    @property
    def session(self) -> CheckoutSession:
        return self.data.checkout_session

    @property
    def purchase(self) -> PurchaseMetadata:
        return self.data.checkout_session.metadata


class IgnoredEvent(BaseModel):
    """Evento fuera del alcance de la reconciliación (p. ej. sincronización de catálogo)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    account: Optional[str] = None


WebhookEvent = Union[CheckoutSessionCompletedEvent, IgnoredEvent]


__all__ = [
    "CHECKOUT_SESSION_COMPLETED",
    "ClassPassMetadata",
    "CartMetadata",
    "SingleProgramMetadata",
    "UnknownMetadata",
    "InvalidMetadata",
    "PurchaseMetadata",
    "parse_purchase_metadata",
    "CheckoutSession",
    "CheckoutSessionCompletedEvent",
    "IgnoredEvent",
    "WebhookEvent",
]

# Fin del archivo app/modules/payments/schemas/webhook_event_schemas.py
