"""
Usage metering: one unit per billable call.
"""

from datetime import datetime, timezone
from typing import Optional

from stripekit.common.core.telemetry import get_logger, trace_span
from stripekit.packages.billing.models.domain import BillingAccount, Subscription
from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.licensing.models.domain import UsageRecord

logger = get_logger(__name__)


class UsageMeterReporter:
    """Reports usage against the metered line item of a subscription."""

    def __init__(self, provider: BillingProviderInterface):
        self.provider = provider

    @trace_span
    async def record_call(
        self,
        account: BillingAccount,
        subscription: Subscription,
        quantity: int = 1,
    ) -> Optional[UsageRecord]:
        """
        Submit a usage increment timestamped now.

        Subscriptions without a metered item (flat-fee plans) are skipped and
        return None. Every call reports; nothing is cached or batched.

        Raises:
            ProviderError: The provider rejected the usage report
        """
        item = subscription.metered_item
        if item is None:
            logger.debug(
                "Subscription has no metered item, skipping usage report",
                extra={"subscription_id": subscription.id},
            )
            return None

        timestamp = datetime.now(timezone.utc)
        await self.provider.report_usage(
            account.id, item, quantity=quantity, timestamp=timestamp
        )

        return UsageRecord(
            account_id=account.id,
            subscription_id=subscription.id,
            subscription_item_id=item.id,
            quantity=quantity,
            timestamp=timestamp,
        )
