"""
Canonical webhook events.

The gateway's own normalized representation of provider webhooks, independent
of Stripe's wire format. Field aliases are camelCase for serialization.
"""

from datetime import datetime
from typing import Any, Literal, Optional, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanonicalEventType(str, Enum):
    """Canonical event tags handlers register against."""

    PAYMENT_SUCCEEDED = "payment.succeeded"
    PAYMENT_FAILED = "payment.failed"
    SUBSCRIPTION_CREATED = "subscription.created"
    SUBSCRIPTION_ENDED = "subscription.ended"
    CHARGE_REFUNDED = "charge.refunded"


class CanonicalModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    event_type: str


class PaymentOutcome(CanonicalModel):
    """A payment intent that succeeded or failed."""

    outcome: Literal["succeeded", "failed"]
    payment_id: str
    account_id: Optional[str] = None
    amount: float  # Decimal currency units
    currency: str
    status: str
    metadata: dict[str, str] = Field(default_factory=dict)


class SubscriptionLifecycle(CanonicalModel):
    """A subscription that was created or ended."""

    change: Literal["created", "ended"]
    subscription_id: str
    account_id: str
    status: str
    next_billing_at: Optional[datetime] = None


class ChargeRefund(CanonicalModel):
    """A refunded charge."""

    charge_id: str
    account_id: Optional[str] = None
    amount: float  # Decimal currency units
    amount_refunded: Optional[float] = None
    refunded: bool


class PassThrough(CanonicalModel):
    """Any event type without a canonical mapping, payload untouched."""

    payload: dict[str, Any]


CanonicalEvent = Union[PaymentOutcome, SubscriptionLifecycle, ChargeRefund, PassThrough]
