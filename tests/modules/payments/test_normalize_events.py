# -*- coding: utf-8 -*-
"""
tests/modules/payments/test_normalize_events.py

Normalización de payloads de Stripe a eventos tipados.

Autor: StudioHub
Fecha: 2026-10-17
"""

import json
from uuid import uuid4

import pytest

from app.modules.payments.facades.webhooks import WebhookNormalizationError, normalize_stripe_event
from app.modules.payments.schemas import (
    CartMetadata,
    CheckoutSessionCompletedEvent,
    ClassPassMetadata,
    IgnoredEvent,
    InvalidMetadata,
    SingleProgramMetadata,
    UnknownMetadata,
    parse_purchase_metadata,
)
from tests.fakes import checkout_payload, encode_payload


def test_class_pass_takes_priority_over_cart_and_program():
    product_id, studio_id, profile_id = uuid4(), uuid4(), uuid4()
    payload = checkout_payload("cs_test_1", {
        "class_pass_product_id": product_id,
        "studio_id": studio_id,
        "credit_count": 10,
        "expiration_months": 12,
        "cart_id": uuid4(),
        "program_id": uuid4(),
        "user_profile_id": profile_id,
    })

    event = normalize_stripe_event(encode_payload(payload))

    assert isinstance(event, CheckoutSessionCompletedEvent)
    purchase = event.purchase
    assert isinstance(purchase, ClassPassMetadata)
    assert purchase.kind == "class_pass"
    assert purchase.class_pass_product_id == product_id
    assert purchase.studio_id == studio_id
    assert purchase.credit_count == 10
    assert purchase.expiration_months == 12
    assert purchase.user_profile_id == profile_id


def test_cart_takes_priority_over_program():
    cart_id = uuid4()
    event = normalize_stripe_event(checkout_payload("cs_test_2", {"cart_id": cart_id, "program_id": uuid4()}))

    assert isinstance(event.purchase, CartMetadata)
    assert event.purchase.cart_id == cart_id


def test_single_program_and_session_fields():
    program_id = uuid4()
    payload = checkout_payload(
        "cs_test_3", {"program_id": program_id},
        amount_total=4500, account="acct_123",
    )

    event = normalize_stripe_event(json.dumps(payload))

    assert isinstance(event.purchase, SingleProgramMetadata)
    assert event.purchase.program_id == program_id
    assert event.session.id == "cs_test_3"
    assert event.session.amount_total == 4500
    assert event.session.payment_intent == "pi_test_1"
    assert event.account == "acct_123"


def test_blank_metadata_values_are_absent():
    payload = checkout_payload("cs_test_4", {"cart_id": "  ", "program_id": "", "user_profile_id": ""})

    event = normalize_stripe_event(payload)

    assert isinstance(event.purchase, UnknownMetadata)
    assert event.purchase.user_profile_id is None


def test_missing_metadata_is_unknown():
    payload = checkout_payload("cs_test_5", {})
    del payload["data"]["object"]["metadata"]

    event = normalize_stripe_event(payload)

    assert isinstance(event.purchase, UnknownMetadata)


def test_blank_expiration_means_no_expiry():
    metadata = parse_purchase_metadata({
        "class_pass_product_id": str(uuid4()),
        "studio_id": str(uuid4()),
        "credit_count": "5",
        "expiration_months": "",
    })

    assert isinstance(metadata, ClassPassMetadata)
    assert metadata.credit_count == 5
    assert metadata.expiration_months is None


def test_expanded_payment_intent_is_reduced_to_id():
    payload = checkout_payload("cs_test_6", {"program_id": uuid4()})
    payload["data"]["object"]["payment_intent"] = {"id": "pi_expanded", "object": "payment_intent"}

    event = normalize_stripe_event(payload)

    assert event.session.payment_intent == "pi_expanded"


@pytest.mark.parametrize("event_type", ["product.created", "price.updated", "checkout.session.expired"])
def test_other_event_types_are_ignored(event_type):
    event = normalize_stripe_event({"id": "evt_other", "type": event_type, "data": {"object": {}}})

    assert isinstance(event, IgnoredEvent)
    assert event.type == event_type


@pytest.mark.parametrize("body", [b"not json", b"[1, 2, 3]", b'{"type": "checkout.session.completed"}', b'{"id": "evt_1"}'])
def test_malformed_payloads_raise(body):
    with pytest.raises(WebhookNormalizationError):
        normalize_stripe_event(body)


def test_incomplete_class_pass_metadata_is_invalid_not_an_error():
    # class_pass_product_id sin studio_id ni credit_count
    profile_id = uuid4()
    payload = checkout_payload(
        "cs_test_7", {"class_pass_product_id": uuid4(), "user_profile_id": profile_id},
    )

    event = normalize_stripe_event(payload)

    assert isinstance(event, CheckoutSessionCompletedEvent)
    assert isinstance(event.purchase, InvalidMetadata)
    assert event.purchase.intended_kind == "class_pass"
    assert any(err.startswith("studio_id") for err in event.purchase.errors)
    assert event.purchase.user_profile_id == profile_id


def test_non_uuid_program_is_invalid_metadata():
    payload = checkout_payload("cs_test_8", {"program_id": "ballet-101"})

    event = normalize_stripe_event(payload)

    assert isinstance(event.purchase, InvalidMetadata)
    assert event.purchase.intended_kind == "program"
    assert event.purchase.errors


def test_non_uuid_profile_reference_is_treated_as_absent():
    program_id = uuid4()
    payload = checkout_payload(
        "cs_test_9", {"program_id": program_id, "user_profile_id": "legacy-123"},
    )

    event = normalize_stripe_event(payload)

    assert isinstance(event.purchase, SingleProgramMetadata)
    assert event.purchase.program_id == program_id
    assert event.purchase.user_profile_id is None


def test_non_object_metadata_raises():
    payload = checkout_payload("cs_test_10", {})
    payload["data"]["object"]["metadata"] = "program_id=abc"

    with pytest.raises(WebhookNormalizationError):
        normalize_stripe_event(payload)


def test_checkout_without_session_object_raises():
    with pytest.raises(WebhookNormalizationError):
        normalize_stripe_event({"id": "evt_1", "type": "checkout.session.completed", "data": {}})
