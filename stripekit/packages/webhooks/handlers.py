"""
Handlers the standalone server registers for its own webhook endpoint.

They only record the event; embedding applications register their own
handlers through StripeKit instead.
"""

from stripekit.common.core.telemetry import get_logger
from stripekit.packages.webhooks.models.domain import (
    CanonicalEventType,
    ChargeRefund,
    PaymentOutcome,
    SubscriptionLifecycle,
    WebhookEvent,
)
from stripekit.packages.webhooks.registry import HandlerRegistry

logger = get_logger(__name__)


async def _handle_payment_succeeded(
    payment: PaymentOutcome, event: WebhookEvent
) -> None:
    logger.info(
        f"Payment succeeded: {payment.payment_id}",
        extra={
            "event_id": event.id,
            "payment_id": payment.payment_id,
            "customer_id": payment.account_id,
            "amount": payment.amount,
            "currency": payment.currency,
        },
    )


async def _handle_payment_failed(payment: PaymentOutcome, event: WebhookEvent) -> None:
    logger.warning(
        f"Payment failed: {payment.payment_id}",
        extra={
            "event_id": event.id,
            "payment_id": payment.payment_id,
            "customer_id": payment.account_id,
            "amount": payment.amount,
            "status": payment.status,
        },
    )


async def _handle_subscription_created(
    subscription: SubscriptionLifecycle, event: WebhookEvent
) -> None:
    logger.info(
        f"Subscription created: {subscription.subscription_id}",
        extra={
            "event_id": event.id,
            "subscription_id": subscription.subscription_id,
            "customer_id": subscription.account_id,
            "status": subscription.status,
            "next_billing_at": (
                subscription.next_billing_at.isoformat()
                if subscription.next_billing_at
                else None
            ),
        },
    )


async def _handle_subscription_ended(
    subscription: SubscriptionLifecycle, event: WebhookEvent
) -> None:
    # Keys of this account stop validating once no active subscription remains
    logger.info(
        f"Subscription ended: {subscription.subscription_id}",
        extra={
            "event_id": event.id,
            "subscription_id": subscription.subscription_id,
            "customer_id": subscription.account_id,
        },
    )


async def _handle_charge_refunded(refund: ChargeRefund, event: WebhookEvent) -> None:
    logger.info(
        f"Charge refunded: {refund.charge_id}",
        extra={
            "event_id": event.id,
            "charge_id": refund.charge_id,
            "customer_id": refund.account_id,
            "amount_refunded": refund.amount_refunded,
        },
    )


def register_default_handlers(registry: HandlerRegistry) -> HandlerRegistry:
    """Register the server's logging handlers for every canonical event type."""
    registry.register(CanonicalEventType.PAYMENT_SUCCEEDED, _handle_payment_succeeded)
    registry.register(CanonicalEventType.PAYMENT_FAILED, _handle_payment_failed)
    registry.register(
        CanonicalEventType.SUBSCRIPTION_CREATED, _handle_subscription_created
    )
    registry.register(CanonicalEventType.SUBSCRIPTION_ENDED, _handle_subscription_ended)
    registry.register(CanonicalEventType.CHARGE_REFUNDED, _handle_charge_refunded)
    return registry
