"""
Maps verified Stripe events onto canonical domain events.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from stripekit.common.core.telemetry import get_logger
from stripekit.packages.webhooks.models.domain import (
    CanonicalEvent,
    CanonicalEventType,
    ChargeRefund,
    PassThrough,
    PaymentOutcome,
    StripeWebhookType,
    SubscriptionLifecycle,
    WebhookEvent,
)

logger = get_logger(__name__)

SOURCE_TO_CANONICAL: dict[str, CanonicalEventType] = {
    StripeWebhookType.PAYMENT_INTENT_SUCCEEDED.value: CanonicalEventType.PAYMENT_SUCCEEDED,
    StripeWebhookType.PAYMENT_INTENT_FAILED.value: CanonicalEventType.PAYMENT_FAILED,
    StripeWebhookType.SUBSCRIPTION_CREATED.value: CanonicalEventType.SUBSCRIPTION_CREATED,
    StripeWebhookType.SUBSCRIPTION_DELETED.value: CanonicalEventType.SUBSCRIPTION_ENDED,
    StripeWebhookType.CHARGE_REFUNDED.value: CanonicalEventType.CHARGE_REFUNDED,
}


def to_major_units(amount_minor: Optional[int]) -> Optional[float]:
    """Convert a minor-unit integer (cents) to decimal currency units."""
    if amount_minor is None:
        return None
    return amount_minor / 100


def _period_end(data: dict[str, Any]) -> Optional[datetime]:
    epoch = data.get("current_period_end")
    if not epoch:
        items = (data.get("items") or {}).get("data") or []
        epoch = next(
            (i.get("current_period_end") for i in items if i.get("current_period_end")),
            None,
        )
    return datetime.fromtimestamp(epoch, tz=timezone.utc) if epoch else None


def _payment_outcome(tag: CanonicalEventType, data: dict[str, Any]) -> PaymentOutcome:
    return PaymentOutcome(
        event_type=tag.value,
        outcome=(
            "succeeded" if tag == CanonicalEventType.PAYMENT_SUCCEEDED else "failed"
        ),
        payment_id=data["id"],
        account_id=data.get("customer"),
        amount=to_major_units(data["amount"]),
        currency=data["currency"],
        status=data["status"],
        metadata=data.get("metadata") or {},
    )


def _subscription_lifecycle(
    tag: CanonicalEventType, data: dict[str, Any]
) -> SubscriptionLifecycle:
    return SubscriptionLifecycle(
        event_type=tag.value,
        change="created" if tag == CanonicalEventType.SUBSCRIPTION_CREATED else "ended",
        subscription_id=data["id"],
        account_id=data["customer"],
        status=data["status"],
        next_billing_at=_period_end(data),
    )


def _charge_refund(tag: CanonicalEventType, data: dict[str, Any]) -> ChargeRefund:
    return ChargeRefund(
        event_type=tag.value,
        charge_id=data["id"],
        account_id=data.get("customer"),
        amount=to_major_units(data["amount"]),
        amount_refunded=to_major_units(data.get("amount_refunded")),
        refunded=bool(data.get("refunded")),
    )


_BUILDERS: dict[
    CanonicalEventType, Callable[[CanonicalEventType, dict[str, Any]], CanonicalEvent]
] = {
    CanonicalEventType.PAYMENT_SUCCEEDED: _payment_outcome,
    CanonicalEventType.PAYMENT_FAILED: _payment_outcome,
    CanonicalEventType.SUBSCRIPTION_CREATED: _subscription_lifecycle,
    CanonicalEventType.SUBSCRIPTION_ENDED: _subscription_lifecycle,
    CanonicalEventType.CHARGE_REFUNDED: _charge_refund,
}


def transform(event_type: str, data: dict[str, Any]) -> CanonicalEvent:
    """
    Build the canonical event for a Stripe event type and its nested object.

    Unknown types, and payloads that do not fit their mapped shape, come back
    as PassThrough with the raw tag preserved.
    """
    canonical = SOURCE_TO_CANONICAL.get(event_type)
    if canonical is None:
        return PassThrough(event_type=event_type, payload=data)

    try:
        return _BUILDERS[canonical](canonical, data)
    except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
        logger.warning(
            f"Could not canonicalize {event_type}, passing through: {e}",
            extra={"event_type": event_type, "error": str(e)},
        )
        return PassThrough(event_type=event_type, payload=data)


def transform_event(event: WebhookEvent) -> CanonicalEvent:
    """Canonicalize a verified webhook event."""
    return transform(event.type, event.data_object)
