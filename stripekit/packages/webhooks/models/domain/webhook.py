"""
Domain models for verified Stripe webhook envelopes.
"""

from typing import Any, Optional
from enum import Enum
from pydantic import BaseModel


class StripeWebhookType(str, Enum):
    """Stripe webhook event types with a canonical mapping."""

    # Payment
    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
    PAYMENT_INTENT_FAILED = "payment_intent.payment_failed"

    # Subscription
    SUBSCRIPTION_CREATED = "customer.subscription.created"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"

    # Charge
    CHARGE_REFUNDED = "charge.refunded"


class StripeEventData(BaseModel):
    """Stripe event data wrapper."""

    object: dict[str, Any]  # The actual object (payment intent, subscription, charge, ...)


class WebhookEvent(BaseModel):
    """
    Verified, typed webhook envelope.

    ``type`` is kept as the raw string: Stripe adds event types over time and
    unknown ones must still parse.
    """

    id: str
    type: str
    data: StripeEventData
    created: Optional[int] = None
    livemode: bool = False

    @property
    def data_object(self) -> dict[str, Any]:
        return self.data.object
