"""
Subscription status evaluation.
"""

from typing import Optional

from stripekit.common.core.exceptions import SubscriptionInactiveError
from stripekit.common.core.telemetry import get_logger, trace_span
from stripekit.packages.billing.models.domain import (
    BillingAccount,
    Subscription,
    SubscriptionStatus,
)
from stripekit.packages.billing.providers.interface import BillingProviderInterface

logger = get_logger(__name__)


class SubscriptionStatusEvaluator:
    """Decides whether an account is currently entitled to service."""

    def __init__(self, provider: BillingProviderInterface):
        self.provider = provider

    @trace_span
    async def require_active(self, account: BillingAccount) -> Subscription:
        """
        Return the account's active subscription.

        Only status ``active`` counts; trialing, past_due, canceled and the
        rest are refused.

        Raises:
            SubscriptionInactiveError: No active subscription
        """
        subscriptions = await self.provider.list_subscriptions(
            account.id, status=SubscriptionStatus.ACTIVE, limit=1
        )
        active = next((s for s in subscriptions if s.has_access()), None)

        if active is None:
            logger.info(
                "No active subscription for account",
                extra={"customer_id": account.id},
            )
            raise SubscriptionInactiveError()

        return active

    @trace_span
    async def latest(self, account: BillingAccount) -> Optional[Subscription]:
        """Most recent subscription of any status, if any."""
        subscriptions = await self.provider.list_subscriptions(account.id, limit=1)
        return subscriptions[0] if subscriptions else None
