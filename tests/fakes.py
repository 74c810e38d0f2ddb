# -*- coding: utf-8 -*-
"""
tests/fakes.py

Dobles en memoria para probar la reconciliación sin PostgreSQL.

Los repositorios fake respetan las mismas restricciones de unicidad que
la base real:
- inschrijvingen: UNIQUE(user_id, program_id) con upsert
- class_pass_purchases: UNIQUE(stripe_checkout_session_id)
- class_pass_ledger: un único movimiento 'purchase' por compra

Autor: StudioHub
Fecha: 2026-10-17
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy.dialects import postgresql

from app.modules.class_passes.enums import LedgerReason
from app.modules.class_passes.models import ClassPassLedgerEntry, ClassPassPurchase
from app.modules.class_passes.services import CreditLedgerGranter
from app.modules.enrollments.enums import EnrollmentStatus
from app.modules.enrollments.models import Program
from app.modules.enrollments.notifications import EnrollmentNotification
from app.modules.enrollments.services import EnrollmentReconciler
from app.modules.payments.adapters import PaymentDetails
from app.modules.payments.enums import CartStatus, TransactionStatus
from app.modules.payments.facades.webhooks import PaymentEventReconciler
from app.modules.payments.models import CartItem, StripeTransaction
from app.modules.payments.services import TransactionStatusService
from app.modules.user_profile import ProfileSnapshotResolver
from app.modules.user_profile.models import AuthUser, UserProfile
from app.shared.utils.datetime_helpers import utcnow


# ---------------------------------------------------------------------------
# Sesión
# ---------------------------------------------------------------------------

class _FakeSavepoint:
    def __init__(self, session: "FakeSession") -> None:
        self.session = session

    async def __aenter__(self) -> "_FakeSavepoint":
        self.session.savepoints += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self.session.savepoint_rollbacks += 1
        return False


class FakeSession:
    """Sustituto mínimo de AsyncSession para los servicios bajo prueba."""

    def __init__(self) -> None:
        self.added: list[Any] = []
        self.commits = 0
        self.rollbacks = 0
        self.savepoints = 0
        self.savepoint_rollbacks = 0

    def begin_nested(self) -> _FakeSavepoint:
        return _FakeSavepoint(self)

    def add(self, obj: Any) -> None:
        self.added.append(obj)

    async def flush(self) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    async def close(self) -> None:
        return None


class CapturedResult:
    """Resultado mínimo de session.execute para los repositorios SQL."""

    def __init__(self, value: Any = None, *, rowcount: int = 0) -> None:
        self.value = value
        self.rowcount = rowcount

    def scalar_one(self) -> Any:
        return self.value

    def scalar_one_or_none(self) -> Any:
        return self.value

    def scalars(self) -> "CapturedResult":
        return self

    def first(self) -> Any:
        return self.value

    def all(self) -> list[Any]:
        return list(self.value or [])


class CapturingSession(FakeSession):
    """
    FakeSession que guarda cada sentencia ejecutada para compilarla con el
    dialecto de PostgreSQL. Los resultados se devuelven en orden de cola.
    """

    def __init__(self, *results: CapturedResult, flush_error: Optional[Exception] = None) -> None:
        super().__init__()
        self.statements: list[Any] = []
        self.results = list(results)
        self.flush_error = flush_error

    async def execute(self, stmt: Any, *args: Any, **kwargs: Any) -> CapturedResult:
        self.statements.append(stmt)
        return self.results.pop(0) if self.results else CapturedResult()

    async def flush(self) -> None:
        if self.flush_error is not None:
            raise self.flush_error

    def sql(self, index: int = -1) -> str:
        compiled = self.statements[index].compile(dialect=postgresql.dialect())
        return " ".join(str(compiled).split())

    def params(self, index: int = -1) -> dict[str, Any]:
        return dict(self.statements[index].compile(dialect=postgresql.dialect()).params)


# ---------------------------------------------------------------------------
# Repositorios
# ---------------------------------------------------------------------------

class FakeTransactionRepository:

    def __init__(self, *transactions: StripeTransaction) -> None:
        self.by_session = {tx.stripe_checkout_session_id: tx for tx in transactions}
        self.saves = 0

    async def get_by_checkout_session_id(self, session, stripe_checkout_session_id):
        return self.by_session.get(stripe_checkout_session_id)

    async def save(self, session, tx):
        self.saves += 1
        return tx


class FakeProgramRepository:

    def __init__(self, *programs: Program) -> None:
        self.programs = {p.id: p for p in programs}

    async def get_by_id(self, session, program_id):
        return self.programs.get(program_id)


@dataclass
class EnrollmentRow:
    id: UUID
    user_id: UUID
    program_id: UUID
    status: EnrollmentStatus
    form_data: dict[str, Any]
    profile_snapshot: Optional[dict[str, Any]]
    upserts: int = 1


class FakeEnrollmentRepository:
    """UNIQUE(user_id, program_id) + ON CONFLICT DO UPDATE."""

    def __init__(self) -> None:
        self.rows: dict[tuple[UUID, UUID], EnrollmentRow] = {}

    def seed(self, user_id: UUID, program_id: UUID, status: EnrollmentStatus) -> EnrollmentRow:
        row = EnrollmentRow(
            id=uuid4(),
            user_id=user_id,
            program_id=program_id,
            status=status,
            form_data={},
            profile_snapshot=None,
        )
        self.rows[(user_id, program_id)] = row
        return row

    def for_program(self, program_id: UUID) -> list[EnrollmentRow]:
        return [row for row in self.rows.values() if row.program_id == program_id]

    async def count_active(self, session, program_id):
        return sum(
            1 for row in self.rows.values()
            if row.program_id == program_id and row.status is EnrollmentStatus.ACTIVE
        )

    async def get_status(self, session, user_id, program_id):
        row = self.rows.get((user_id, program_id))
        return row.status if row else None

    async def upsert(self, session, *, user_id, program_id, status, form_data, profile_snapshot):
        row = self.rows.get((user_id, program_id))
        if row is None:
            row = EnrollmentRow(
                id=uuid4(),
                user_id=user_id,
                program_id=program_id,
                status=status,
                form_data=form_data,
                profile_snapshot=profile_snapshot,
            )
            self.rows[(user_id, program_id)] = row
            return row.id

        row.status = status
        row.form_data = form_data
        if row.profile_snapshot is None:
            row.profile_snapshot = profile_snapshot
        row.upserts += 1
        return row.id


class FakeCartRepository:

    def __init__(self) -> None:
        self.items: dict[UUID, list[CartItem]] = {}
        self.statuses: dict[UUID, CartStatus] = {}

    def add_cart(self, *program_ids: UUID, price: Decimal = Decimal("25.00")) -> UUID:
        cart_id = uuid4()
        self.statuses[cart_id] = CartStatus.ACTIVE
        self.items[cart_id] = [
            CartItem(
                id=uuid4(),
                cart_id=cart_id,
                program_id=program_id,
                price_snapshot=price,
                lesson_detail_type="group",
                lesson_detail_id=f"lesson-{index}",
                lesson_metadata={"weekday": "monday"},
            )
            for index, program_id in enumerate(program_ids)
        ]
        return cart_id

    async def list_items(self, session, cart_id):
        return list(self.items.get(cart_id, []))

    async def mark_completed(self, session, cart_id):
        if self.statuses.get(cart_id) is not CartStatus.ACTIVE:
            return False
        self.statuses[cart_id] = CartStatus.COMPLETED
        return True


class FakeClassPassPurchaseRepository:
    """UNIQUE(stripe_checkout_session_id) + ON CONFLICT DO NOTHING."""

    def __init__(self) -> None:
        self.by_session: dict[str, ClassPassPurchase] = {}

    async def insert_if_absent(
        self, session, *, user_id, studio_id, product_id,
        stripe_checkout_session_id, credits_total, expires_at,
    ):
        if stripe_checkout_session_id in self.by_session:
            return False
        self.by_session[stripe_checkout_session_id] = ClassPassPurchase(
            id=uuid4(),
            user_id=user_id,
            studio_id=studio_id,
            product_id=product_id,
            stripe_checkout_session_id=stripe_checkout_session_id,
            credits_total=credits_total,
            credits_used=0,
            expires_at=expires_at,
            status="paid",
            created_at=utcnow(),
        )
        return True

    async def get_by_session_id(self, session, stripe_checkout_session_id):
        return self.by_session.get(stripe_checkout_session_id)


class FakeClassPassLedgerRepository:
    """Append-only; un movimiento 'purchase' por compra."""

    def __init__(self) -> None:
        self.entries: list[ClassPassLedgerEntry] = []

    async def get_purchase_grant(self, session, purchase_id):
        for entry in self.entries:
            if entry.purchase_id == purchase_id and entry.reason == LedgerReason.PURCHASE.value:
                return entry
        return None

    async def append_purchase_grant(self, session, *, purchase, delta, entry_metadata=None):
        existing = await self.get_purchase_grant(session, purchase.id)
        if existing is not None:
            return existing, False
        entry = ClassPassLedgerEntry(
            id=uuid4(),
            user_id=purchase.user_id,
            studio_id=purchase.studio_id,
            purchase_id=purchase.id,
            delta=delta,
            reason=LedgerReason.PURCHASE.value,
            entry_metadata=entry_metadata or {},
        )
        self.entries.append(entry)
        return entry, True

    async def get_balance(self, session, user_id, studio_id):
        return sum(
            entry.delta for entry in self.entries
            if entry.user_id == user_id and entry.studio_id == studio_id
        )


class FakeUserProfileRepository:

    def __init__(self) -> None:
        self.by_user: dict[UUID, UserProfile] = {}

    def add(self, profile: UserProfile) -> UserProfile:
        self.by_user[profile.user_id] = profile
        return profile

    async def get_by_user_id(self, session, user_id):
        return self.by_user.get(user_id)

    async def get_user_id_by_profile_id(self, session, profile_id):
        for profile in self.by_user.values():
            if profile.id == profile_id:
                return profile.user_id
        return None


class FakeAuthUserRepository:

    def __init__(self, *users: AuthUser) -> None:
        self.users = {u.id: u for u in users}

    async def get_by_id(self, session, user_id):
        return self.users.get(user_id)


# ---------------------------------------------------------------------------
# Colaboradores externos
# ---------------------------------------------------------------------------

class FakeDetailsAdapter:

    def __init__(self, details: Optional[PaymentDetails] = None) -> None:
        self.details = details
        self.calls: list[tuple[Optional[str], Optional[str]]] = []

    async def fetch_payment_details(self, payment_intent_id, account_id=None):
        self.calls.append((payment_intent_id, account_id))
        return self.details


class RecordingNotifier:

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[EnrollmentNotification] = []

    async def notify_enrollment(self, notification: EnrollmentNotification) -> None:
        if self.fail:
            raise RuntimeError("notification channel down")
        self.sent.append(notification)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def make_program(
    capacity: Optional[int] = None,
    *,
    waitlist_enabled: bool = False,
    manual_full_override: bool = False,
    studio_id: Optional[UUID] = None,
    title: str = "Ballet beginners",
) -> Program:
    return Program(
        id=uuid4(),
        studio_id=studio_id or uuid4(),
        title=title,
        capacity=capacity,
        waitlist_enabled=waitlist_enabled,
        manual_full_override=manual_full_override,
    )


def make_transaction(
    checkout_session_id: str,
    *,
    user_id: Optional[UUID] = None,
    status: TransactionStatus = TransactionStatus.PENDING,
    metadata: Optional[dict[str, Any]] = None,
) -> StripeTransaction:
    return StripeTransaction(
        id=uuid4(),
        user_id=user_id,
        stripe_checkout_session_id=checkout_session_id,
        status=status,
        tx_metadata=dict(metadata or {}),
    )


def make_profile(user_id: UUID, **overrides: Any) -> UserProfile:
    values: dict[str, Any] = {
        "id": uuid4(),
        "user_id": user_id,
        "first_name": "Anna",
        "last_name": "de Vries",
        "email": "anna@example.com",
        "street": "Keizersgracht",
        "house_number": "12",
        "house_number_addition": None,
        "postal_code": "1015 CJ",
        "city": "Amsterdam",
        "phone_number": "+31 6 1234 5678",
        "date_of_birth": date(1990, 4, 2),
    }
    values.update(overrides)
    return UserProfile(**values)


def checkout_payload(
    checkout_session_id: str,
    metadata: dict[str, Any],
    *,
    event_id: str = "evt_test_1",
    payment_intent: Optional[str] = "pi_test_1",
    amount_total: Optional[int] = 2500,
    account: Optional[str] = None,
) -> dict[str, Any]:
    """Payload crudo de checkout.session.completed (metadata como strings)."""
    payload: dict[str, Any] = {
        "id": event_id,
        "object": "event",
        "type": "checkout.session.completed",
        "livemode": False,
        "data": {
            "object": {
                "id": checkout_session_id,
                "object": "checkout.session",
                "payment_intent": payment_intent,
                "amount_total": amount_total,
                "currency": "eur",
                "metadata": {k: str(v) for k, v in metadata.items()},
            }
        },
    }
    if account:
        payload["account"] = account
    return payload


# ---------------------------------------------------------------------------
# Mundo completo para el orquestador
# ---------------------------------------------------------------------------

@dataclass
class ReconciliationWorld:
    transactions: FakeTransactionRepository = field(default_factory=FakeTransactionRepository)
    programs: FakeProgramRepository = field(default_factory=FakeProgramRepository)
    enrollments: FakeEnrollmentRepository = field(default_factory=FakeEnrollmentRepository)
    carts: FakeCartRepository = field(default_factory=FakeCartRepository)
    purchases: FakeClassPassPurchaseRepository = field(default_factory=FakeClassPassPurchaseRepository)
    ledger: FakeClassPassLedgerRepository = field(default_factory=FakeClassPassLedgerRepository)
    profiles: FakeUserProfileRepository = field(default_factory=FakeUserProfileRepository)
    users: FakeAuthUserRepository = field(default_factory=FakeAuthUserRepository)
    details: FakeDetailsAdapter = field(default_factory=FakeDetailsAdapter)
    notifier: RecordingNotifier = field(default_factory=RecordingNotifier)

    def add_transaction(self, tx: StripeTransaction) -> StripeTransaction:
        self.transactions.by_session[tx.stripe_checkout_session_id] = tx
        return tx

    def add_program(self, program: Program) -> Program:
        self.programs.programs[program.id] = program
        return program

    def reconciler(self, **overrides: Any) -> PaymentEventReconciler:
        kwargs: dict[str, Any] = {
            "status_service": TransactionStatusService(self.transactions),
            "details_adapter": self.details,
            "profile_repo": self.profiles,
            "snapshot_resolver": ProfileSnapshotResolver(self.profiles, self.users),
            "enrollment_reconciler": EnrollmentReconciler(self.programs, self.enrollments),
            "cart_repo": self.carts,
            "credit_granter": CreditLedgerGranter(self.purchases, self.ledger),
            "notifier": self.notifier,
            "notifications_enabled": True,
        }
        kwargs.update(overrides)
        return PaymentEventReconciler(**kwargs)


# ---------------------------------------------------------------------------
# Firma Stripe-Signature
# ---------------------------------------------------------------------------

def stripe_signature_header(payload: bytes, secret: str, timestamp: Optional[int] = None) -> str:
    """Header t=...,v1=... calculado como lo hace Stripe (HMAC-SHA256 de "t.payload")."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.".encode("utf-8") + payload
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={signature}"


def encode_payload(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


# Fin del archivo tests/fakes.py
