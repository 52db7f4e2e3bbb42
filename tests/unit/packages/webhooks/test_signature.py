"""
Unit tests for webhook signature verification.
"""

import json
import time
import pytest

from stripekit.common.core.exceptions import SignatureError
from stripekit.packages.webhooks.signature import verify_signature
from tests.fixtures import (
    SAMPLE_PAYMENT_INTENT,
    WEBHOOK_SECRET,
    sign_payload,
    stripe_event,
)


@pytest.fixture
def payload():
    return stripe_event("payment_intent.succeeded", SAMPLE_PAYMENT_INTENT)


class TestVerifySignature:
    def test_valid_signature(self, payload):
        event = verify_signature(
            payload.encode("utf-8"), sign_payload(payload), WEBHOOK_SECRET
        )

        assert event.id == "evt_test123"
        assert event.type == "payment_intent.succeeded"
        assert event.data_object["amount"] == 2999

    def test_text_payload(self, payload):
        event = verify_signature(payload, sign_payload(payload), WEBHOOK_SECRET)
        assert event.id == "evt_test123"

    def test_wrong_secret(self, payload):
        with pytest.raises(SignatureError, match="Webhook Error"):
            verify_signature(
                payload, sign_payload(payload, secret="whsec_other"), WEBHOOK_SECRET
            )

    def test_tampered_body(self, payload):
        signature = sign_payload(payload)
        tampered = payload.replace("2999", "1")

        with pytest.raises(SignatureError):
            verify_signature(tampered, signature, WEBHOOK_SECRET)

    def test_reserialized_body_fails(self, payload):
        """A parsed and re-serialized body no longer matches the signature."""
        signature = sign_payload(payload)
        reserialized = json.dumps(json.loads(payload), indent=2)

        with pytest.raises(SignatureError):
            verify_signature(reserialized, signature, WEBHOOK_SECRET)

    def test_stale_timestamp(self, payload):
        signature = sign_payload(payload, timestamp=int(time.time()) - 600)

        with pytest.raises(SignatureError):
            verify_signature(payload, signature, WEBHOOK_SECRET, tolerance=300)

    def test_missing_header(self, payload):
        with pytest.raises(SignatureError, match="missing stripe-signature"):
            verify_signature(payload, None, WEBHOOK_SECRET)

    def test_missing_secret(self, payload):
        with pytest.raises(SignatureError):
            verify_signature(payload, sign_payload(payload), "")

    def test_parsed_payload_rejected(self, payload):
        with pytest.raises(SignatureError, match="raw request body"):
            verify_signature(json.loads(payload), sign_payload(payload), WEBHOOK_SECRET)

    def test_signed_but_not_an_event(self):
        payload = json.dumps({"hello": "world"})

        with pytest.raises(SignatureError, match="invalid payload"):
            verify_signature(payload, sign_payload(payload), WEBHOOK_SECRET)
