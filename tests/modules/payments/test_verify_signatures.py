# -*- coding: utf-8 -*-
"""
tests/modules/payments/test_verify_signatures.py

Verificación de firmas de webhooks de Stripe.

Autor: StudioHub
Fecha: 2026-10-17
"""

import time

import pytest

from app.modules.payments.facades.webhooks import get_signature_header, verify_stripe_webhook
from app.modules.payments.services.webhooks import (
    VerificationOutcome,
    WebhookConfigurationError,
    verify_stripe_signature,
)
from app.shared.config.settings_payments import PaymentsSettings
from tests.fakes import checkout_payload, encode_payload, stripe_signature_header


SECRET = "whsec_unit_secret"
BODY = encode_payload(checkout_payload("cs_test_sig", {"program_id": "5f0e1c1e-8c43-4c6e-9d2c-1c0e3f1b2a10"}))


class TestVerifyStripeSignature:

    def test_valid_signature_is_verified(self):
        result = verify_stripe_signature(BODY, stripe_signature_header(BODY, SECRET), SECRET)
        assert result.outcome is VerificationOutcome.VERIFIED
        assert result.verified

    def test_wrong_secret_is_rejected(self):
        header = stripe_signature_header(BODY, "whsec_someone_else")
        result = verify_stripe_signature(BODY, header, SECRET)
        assert result.rejected
        assert result.reason == "invalid_signature"

    def test_tampered_body_is_rejected(self):
        header = stripe_signature_header(BODY, SECRET)
        result = verify_stripe_signature(BODY.replace(b"cs_test_sig", b"cs_test_xxx"), header, SECRET)
        assert result.rejected

    def test_stale_timestamp_is_rejected(self):
        header = stripe_signature_header(BODY, SECRET, timestamp=int(time.time()) - 3600)
        result = verify_stripe_signature(BODY, header, SECRET, tolerance_seconds=300)
        assert result.rejected

    def test_garbage_header_is_rejected(self):
        result = verify_stripe_signature(BODY, "not-a-signature", SECRET)
        assert result.rejected

    def test_non_utf8_body_is_rejected(self):
        body = b"\xff\xfe\x00"
        result = verify_stripe_signature(body, "t=1,v1=abc", SECRET)
        assert result.rejected
        assert result.reason == "invalid_payload_encoding"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header_is_unsigned(self, header):
        result = verify_stripe_signature(BODY, header, SECRET)
        assert result.outcome is VerificationOutcome.UNSIGNED
        assert result.unsigned

    def test_unsigned_does_not_require_secret(self):
        result = verify_stripe_signature(BODY, None, None)
        assert result.unsigned

    def test_signed_request_without_secret_raises(self):
        with pytest.raises(WebhookConfigurationError):
            verify_stripe_signature(BODY, stripe_signature_header(BODY, SECRET), None)


class TestVerifyStripeWebhookFacade:

    def test_header_lookup_is_case_insensitive(self):
        assert get_signature_header({"STRIPE-SIGNATURE": "t=1,v1=x"}) == "t=1,v1=x"
        assert get_signature_header({"content-type": "application/json"}) is None

    def test_uses_injected_settings(self):
        settings = PaymentsSettings(_env_file=None, stripe_webhook_secret=SECRET)
        headers = {"Stripe-Signature": stripe_signature_header(BODY, SECRET)}

        assert verify_stripe_webhook(BODY, headers, settings=settings).verified

    def test_tolerance_comes_from_settings(self):
        settings = PaymentsSettings(
            _env_file=None,
            stripe_webhook_secret=SECRET,
            stripe_webhook_tolerance_seconds=10,
        )
        headers = {"Stripe-Signature": stripe_signature_header(BODY, SECRET, timestamp=int(time.time()) - 60)}

        assert verify_stripe_webhook(BODY, headers, settings=settings).rejected
