"""Shared builders and sample payloads for tests."""

import hashlib
import hmac
import json
import time
from datetime import datetime, timezone
from typing import Any, Optional

from stripekit.packages.billing.models.domain import (
    AccountPage,
    BillingAccount,
    Price,
    PriceUsageType,
    Subscription,
    SubscriptionItem,
    SubscriptionStatus,
)

WEBHOOK_SECRET = "whsec_test_secret"
VALID_KEY = "sk_prod_" + "a" * 32


def make_account(
    id: str = "cus_test123",
    email: Optional[str] = "user@example.com",
    api_key: Optional[str] = VALID_KEY,
    plan: Optional[str] = "pro",
) -> BillingAccount:
    metadata = {}
    if api_key:
        metadata["apiKey"] = api_key
    if plan:
        metadata["plan"] = plan
    return BillingAccount(id=id, email=email, name="Test User", metadata=metadata)


def make_page(accounts: list[BillingAccount], has_more: bool = False) -> AccountPage:
    return AccountPage(accounts=accounts, has_more=has_more)


def make_subscription(
    id: str = "sub_test123",
    customer_id: str = "cus_test123",
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    metered: bool = False,
    nickname: Optional[str] = "Pro Monthly",
) -> Subscription:
    items = [
        SubscriptionItem(
            id="si_flat", price=Price(id="price_flat", nickname=nickname)
        )
    ]
    if metered:
        items.append(
            SubscriptionItem(
                id="si_metered",
                price=Price(
                    id="price_metered",
                    usage_type=PriceUsageType.METERED,
                    meter_id="mtr_test",
                ),
            )
        )
    return Subscription(
        id=id,
        customer_id=customer_id,
        status=status,
        current_period_end=datetime(2026, 11, 1, tzinfo=timezone.utc),
        items=items,
    )


def stripe_event(
    event_type: str,
    data_object: dict[str, Any],
    event_id: str = "evt_test123",
) -> str:
    """Serialize a Stripe event envelope exactly as it would arrive."""
    return json.dumps(
        {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "created": 1700000000,
            "livemode": False,
            "data": {"object": data_object},
        }
    )


def sign_payload(
    payload: str,
    secret: str = WEBHOOK_SECRET,
    timestamp: Optional[int] = None,
) -> str:
    """Build a Stripe-Signature header for a payload."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


SAMPLE_PAYMENT_INTENT = {
    "id": "pi_test123",
    "object": "payment_intent",
    "amount": 2999,
    "currency": "usd",
    "customer": "cus_test123",
    "status": "succeeded",
    "metadata": {"order": "42"},
}

SAMPLE_SUBSCRIPTION = {
    "id": "sub_test123",
    "object": "subscription",
    "customer": "cus_test123",
    "status": "active",
    "current_period_end": 1761955200,
    "items": {"object": "list", "data": []},
}

SAMPLE_CHARGE = {
    "id": "ch_test123",
    "object": "charge",
    "amount": 5000,
    "amount_refunded": 5000,
    "customer": "cus_test123",
    "refunded": True,
}
