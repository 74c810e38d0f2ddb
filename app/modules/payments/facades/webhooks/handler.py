# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/handler.py

Orquestador de la reconciliación de pagos confirmados por Stripe.

Es el único componente que invoca la ruta del webhook. Recibe un evento
ya verificado y normalizado y lo despacha según la forma de la compra:

- class pass    -> CreditLedgerGranter
- carrito       -> por ítem: capacidad + upsert de inscripción; cierre del carrito
- programa      -> capacidad + upsert de una inscripción

Cada ítem corre en su propio SAVEPOINT: un fallo queda registrado como
ItemOutcome(failed) y no aborta a sus hermanos ni el acuse de recibo.
Reprocesar el mismo evento es seguro (upsert por usuario/programa, compra
única por checkout session y un solo movimiento de ledger por compra).

El commit lo hace la ruta.

Autor: StudioHub
Fecha: 2026-10-16
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.class_passes.services import CreditLedgerGranter
from app.modules.enrollments.enums import AdmissionDecision
from app.modules.enrollments.notifications import (
    EnrollmentNotification,
    EnrollmentNotifier,
    LoggingEnrollmentNotifier,
    dispatch_enrollment_notification,
)
from app.modules.enrollments.services import EnrollmentReconciler, EnrollmentRequest
from app.modules.payments.adapters import StripePaymentDetailsAdapter
from app.modules.payments.metrics import inc_reconciliation_item
from app.modules.payments.models import StripeTransaction
from app.modules.payments.repositories import CartRepository
from app.modules.payments.schemas import (
    CartMetadata,
    CheckoutSessionCompletedEvent,
    ClassPassMetadata,
    IgnoredEvent,
    InvalidMetadata,
    SingleProgramMetadata,
    WebhookEvent,
)
from app.modules.payments.services import TransactionStatusService
from app.modules.user_profile import ProfileSnapshot, ProfileSnapshotResolver, missing_profile_fields
from app.modules.user_profile.repositories import UserProfileRepository
from app.shared.config.settings_payments import get_payments_settings
from .results import ItemKind, ItemOutcome, ItemStatus, ReconciliationReport

logger = logging.getLogger(__name__)

_INVALID_METADATA_KINDS = {
    "class_pass": ItemKind.CLASS_PASS,
    "cart": ItemKind.CART,
    "program": ItemKind.ENROLLMENT,
}


class PaymentEventReconciler:
    """
    Orquestador de la reconciliación (una invocación por evento recibido).

    Todas las dependencias se inyectan; los valores por defecto usan los
    repositorios SQLAlchemy reales.
    """

    def __init__(
        self,
        *,
        status_service: Optional[TransactionStatusService] = None,
        details_adapter: Optional[StripePaymentDetailsAdapter] = None,
        profile_repo: Optional[UserProfileRepository] = None,
        snapshot_resolver: Optional[ProfileSnapshotResolver] = None,
        enrollment_reconciler: Optional[EnrollmentReconciler] = None,
        cart_repo: Optional[CartRepository] = None,
        credit_granter: Optional[CreditLedgerGranter] = None,
        notifier: Optional[EnrollmentNotifier] = None,
        notifications_enabled: bool = True,
    ) -> None:
        self.status_service = status_service or TransactionStatusService()
        self.details_adapter = details_adapter or StripePaymentDetailsAdapter()
        self.profile_repo = profile_repo or UserProfileRepository()
        self.snapshot_resolver = snapshot_resolver or ProfileSnapshotResolver(profile_repo=self.profile_repo)
        self.enrollment_reconciler = enrollment_reconciler or EnrollmentReconciler()
        self.cart_repo = cart_repo or CartRepository()
        self.credit_granter = credit_granter or CreditLedgerGranter()
        self.notifier = notifier
        self.notifications_enabled = notifications_enabled

    # ------------------------------------------------------------------ #
    # Entrada
    # ------------------------------------------------------------------ #

    async def reconcile(self, session: AsyncSession, event: WebhookEvent) -> ReconciliationReport:
        if isinstance(event, IgnoredEvent):
            logger.info("webhook_event_ignored event=%s type=%s", event.id, event.type)
            return ReconciliationReport(
                event_id=event.id,
                event_type=event.type,
                handled=False,
                reason="ignored_event_type",
            )

        checkout = event.session
        purchase = event.purchase
        report = ReconciliationReport(
            event_id=event.id,
            event_type=event.type,
            purchase_kind=purchase.kind,
        )
        logger.info(
            "reconciliation_started event=%s session=%s kind=%s",
            event.id, checkout.id, purchase.kind,
        )

        tx = await self._confirm_transaction(session, event)
        user_id = await self._resolve_user_id(session, tx, purchase.user_profile_id)
        report.user_id = user_id

        if user_id is None:
            logger.warning(
                "reconciliation_skipped reason=user_unresolved event=%s session=%s",
                event.id, checkout.id,
            )
            report.handled = False
            report.reason = "user_unresolved"
        elif isinstance(purchase, ClassPassMetadata):
            await self._grant_class_pass(session, report, user_id, purchase, checkout.id)
        elif isinstance(purchase, (CartMetadata, SingleProgramMetadata)):
            await self._reconcile_enrollments(session, report, event, tx, user_id, purchase)
        elif isinstance(purchase, InvalidMetadata):
            self._skip_invalid_metadata(report, event, purchase)
        else:
            logger.warning(
                "reconciliation_skipped reason=no_purchase_metadata event=%s session=%s",
                event.id, checkout.id,
            )
            report.handled = False
            report.reason = "no_purchase_metadata"

        if tx is not None:
            report.transaction_status = str(tx.status)

        logger.info(
            "reconciliation_finished event=%s user=%s items=%d failed=%d tx_status=%s",
            event.id, str(user_id)[:8] if user_id else None, len(report.items),
            len(report.by_status(ItemStatus.FAILED)), report.transaction_status,
        )
        return report

    # ------------------------------------------------------------------ #
    # Pasos comunes
    # ------------------------------------------------------------------ #

    async def _confirm_transaction(
        self,
        session: AsyncSession,
        event: CheckoutSessionCompletedEvent,
    ) -> Optional[StripeTransaction]:
        checkout = event.session
        details = await self.details_adapter.fetch_payment_details(
            checkout.payment_intent,
            event.account,
        )
        return await self.status_service.mark_succeeded(
            session,
            checkout.id,
            payment_intent_id=checkout.payment_intent,
            details=details,
        )

    async def _resolve_user_id(
        self,
        session: AsyncSession,
        tx: Optional[StripeTransaction],
        user_profile_id: Optional[UUID],
    ) -> Optional[UUID]:
        if tx is not None and tx.user_id is not None:
            return tx.user_id
        if user_profile_id is None:
            return None
        return await self.profile_repo.get_user_id_by_profile_id(session, user_profile_id)

    def _record(self, report: ReconciliationReport, outcome: ItemOutcome) -> None:
        report.add(outcome)
        inc_reconciliation_item(outcome.kind.value, outcome.status.value)

    def _skip_invalid_metadata(
        self,
        report: ReconciliationReport,
        event: CheckoutSessionCompletedEvent,
        purchase: InvalidMetadata,
    ) -> None:
        # El pago queda confirmado; el ítem requiere corrección manual
        logger.warning(
            "reconciliation_skipped reason=invalid_metadata event=%s session=%s intended=%s errors=%s",
            event.id, event.session.id, purchase.intended_kind, list(purchase.errors),
        )
        report.handled = False
        report.reason = "invalid_metadata"
        self._record(report, ItemOutcome(
            kind=_INVALID_METADATA_KINDS.get(purchase.intended_kind, ItemKind.ENROLLMENT),
            status=ItemStatus.SKIPPED,
            reason="invalid_metadata",
            detail={"errors": list(purchase.errors)},
        ))

    # ------------------------------------------------------------------ #
    # Class pass
    # ------------------------------------------------------------------ #

    async def _grant_class_pass(
        self,
        session: AsyncSession,
        report: ReconciliationReport,
        user_id: UUID,
        purchase: ClassPassMetadata,
        checkout_session_id: str,
    ) -> None:
        try:
            async with session.begin_nested():
                grant = await self.credit_granter.grant(
                    session,
                    user_id=user_id,
                    studio_id=purchase.studio_id,
                    product_id=purchase.class_pass_product_id,
                    credit_count=purchase.credit_count,
                    expiration_months=purchase.expiration_months,
                    stripe_checkout_session_id=checkout_session_id,
                )
        except Exception:
            logger.exception(
                "class_pass_grant_failed session=%s user=%s product=%s",
                checkout_session_id, str(user_id)[:8], purchase.class_pass_product_id,
            )
            self._record(report, ItemOutcome(
                kind=ItemKind.CLASS_PASS,
                status=ItemStatus.FAILED,
                reason="grant_failed",
            ))
            return

        already_processed = not grant.purchase_created and not grant.ledger_created
        self._record(report, ItemOutcome(
            kind=ItemKind.CLASS_PASS,
            status=ItemStatus.SUCCEEDED,
            reason="already_processed" if already_processed else None,
            purchase_id=grant.purchase_id,
            detail={
                "credits": grant.credits,
                "expires_at": grant.expires_at.isoformat() if grant.expires_at else None,
            },
        ))

    # ------------------------------------------------------------------ #
    # Inscripciones (carrito / programa único)
    # ------------------------------------------------------------------ #

    async def _enrollment_requests(
        self,
        session: AsyncSession,
        event: CheckoutSessionCompletedEvent,
        purchase: Union[CartMetadata, SingleProgramMetadata],
    ) -> list[EnrollmentRequest]:
        if isinstance(purchase, SingleProgramMetadata):
            amount = event.session.amount_total
            return [EnrollmentRequest(
                program_id=purchase.program_id,
                price_snapshot=Decimal(amount) / 100 if amount is not None else None,
            )]

        items = await self.cart_repo.list_items(session, purchase.cart_id)
        return [
            EnrollmentRequest(
                program_id=item.program_id,
                price_snapshot=item.price_snapshot,
                lesson_detail_type=item.lesson_detail_type,
                lesson_detail_id=item.lesson_detail_id,
                lesson_metadata=item.lesson_metadata,
            )
            for item in items
        ]

    async def _reconcile_enrollments(
        self,
        session: AsyncSession,
        report: ReconciliationReport,
        event: CheckoutSessionCompletedEvent,
        tx: Optional[StripeTransaction],
        user_id: UUID,
        purchase: Union[CartMetadata, SingleProgramMetadata],
    ) -> None:
        requests = await self._enrollment_requests(session, event, purchase)
        cart_id = purchase.cart_id if isinstance(purchase, CartMetadata) else None
        if not requests:
            logger.warning("cart_without_items cart=%s event=%s", cart_id, event.id)
            self._record(report, ItemOutcome(
                kind=ItemKind.CART,
                status=ItemStatus.SKIPPED,
                reason="cart_empty",
                detail={"cart_id": str(cart_id)},
            ))
            return

        snapshot = await self.snapshot_resolver.resolve(session, user_id)
        missing = missing_profile_fields(snapshot)
        if missing:
            await self.status_service.mark_profile_incomplete(session, tx, missing)
            for request in requests:
                self._record(report, ItemOutcome(
                    kind=ItemKind.ENROLLMENT,
                    status=ItemStatus.SKIPPED,
                    reason="profile_incomplete",
                    program_id=request.program_id,
                    detail={"missing": missing},
                ))
            return

        blocked: list[UUID] = []
        for request in requests:
            outcome = await self._reconcile_one(session, user_id, request, snapshot)
            if outcome.reason == AdmissionDecision.BLOCK.value:
                blocked.append(request.program_id)
            self._record(report, outcome)

        if blocked:
            await self.status_service.mark_needs_manual_review_full(session, tx, blocked)

        if cart_id is not None:
            await self._complete_cart(session, report, cart_id)

    async def _reconcile_one(
        self,
        session: AsyncSession,
        user_id: UUID,
        request: EnrollmentRequest,
        snapshot: ProfileSnapshot,
    ) -> ItemOutcome:
        try:
            async with session.begin_nested():
                result = await self.enrollment_reconciler.reconcile(
                    session,
                    user_id=user_id,
                    request=request,
                    snapshot=snapshot,
                )
        except Exception as e:
            logger.exception(
                "enrollment_reconcile_failed program=%s user=%s",
                request.program_id, str(user_id)[:8],
            )
            return ItemOutcome(
                kind=ItemKind.ENROLLMENT,
                status=ItemStatus.FAILED,
                reason=type(e).__name__,
                program_id=request.program_id,
            )

        if result.decision is AdmissionDecision.BLOCK:
            return ItemOutcome(
                kind=ItemKind.ENROLLMENT,
                status=ItemStatus.SKIPPED,
                reason=AdmissionDecision.BLOCK.value,
                program_id=request.program_id,
            )

        if result.newly_active:
            await self._notify(user_id, result.program, result.enrollment_id, snapshot)

        return ItemOutcome(
            kind=ItemKind.ENROLLMENT,
            status=ItemStatus.SUCCEEDED,
            reason=result.decision.value,
            program_id=request.program_id,
            enrollment_id=result.enrollment_id,
            detail={"status": str(result.status)},
        )

    async def _complete_cart(
        self,
        session: AsyncSession,
        report: ReconciliationReport,
        cart_id: UUID,
    ) -> None:
        # Un ítem fallido deja el carrito activo para que un replay lo reintente
        if report.has_failures:
            self._record(report, ItemOutcome(
                kind=ItemKind.CART,
                status=ItemStatus.SKIPPED,
                reason="items_failed",
                detail={"cart_id": str(cart_id)},
            ))
            return

        try:
            async with session.begin_nested():
                completed = await self.cart_repo.mark_completed(session, cart_id)
        except Exception:
            logger.exception("cart_complete_failed cart=%s", cart_id)
            self._record(report, ItemOutcome(
                kind=ItemKind.CART,
                status=ItemStatus.FAILED,
                reason="cart_update_failed",
                detail={"cart_id": str(cart_id)},
            ))
            return

        self._record(report, ItemOutcome(
            kind=ItemKind.CART,
            status=ItemStatus.SUCCEEDED,
            reason=None if completed else "already_completed",
            detail={"cart_id": str(cart_id)},
        ))

    async def _notify(
        self,
        user_id: UUID,
        program,
        enrollment_id: Optional[UUID],
        snapshot: ProfileSnapshot,
    ) -> None:
        if not self.notifications_enabled or self.notifier is None:
            return
        if program.studio_id is None or enrollment_id is None:
            logger.debug("enrollment_notification_skipped program=%s", program.id)
            return
        await dispatch_enrollment_notification(
            self.notifier,
            EnrollmentNotification(
                studio_id=program.studio_id,
                program_id=program.id,
                enrollment_id=enrollment_id,
                enrolled_user_id=user_id,
                profile_snapshot=snapshot.to_json(),
                program_title=program.title,
            ),
        )


def build_default_reconciler() -> PaymentEventReconciler:
    """Orquestador con repositorios SQLAlchemy y settings de pagos actuales."""
    settings = get_payments_settings()
    return PaymentEventReconciler(
        details_adapter=StripePaymentDetailsAdapter(settings),
        notifier=LoggingEnrollmentNotifier(),
        notifications_enabled=settings.enrollment_notifications_enabled,
    )


__all__ = ["PaymentEventReconciler", "build_default_reconciler"]

# Fin del archivo app/modules/payments/facades/webhooks/handler.py
