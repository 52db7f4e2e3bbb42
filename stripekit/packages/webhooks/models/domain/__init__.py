"""Domain models for webhooks."""

from stripekit.packages.webhooks.models.domain.webhook import (
    StripeWebhookType,
    StripeEventData,
    WebhookEvent,
)
from stripekit.packages.webhooks.models.domain.events import (
    CanonicalEventType,
    CanonicalEvent,
    PaymentOutcome,
    SubscriptionLifecycle,
    ChargeRefund,
    PassThrough,
)

__all__ = [
    # Envelope
    "StripeWebhookType",
    "StripeEventData",
    "WebhookEvent",
    # Canonical events
    "CanonicalEventType",
    "CanonicalEvent",
    "PaymentOutcome",
    "SubscriptionLifecycle",
    "ChargeRefund",
    "PassThrough",
]
