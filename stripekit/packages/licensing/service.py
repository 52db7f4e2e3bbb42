"""
License validation protocol.

format check -> key directory -> subscription status -> usage metering.
"""

from datetime import datetime, timezone
from typing import Optional

from stripekit.common.core.constants import (
    CREATED_AT_METADATA_FIELD,
    LICENSE_KEY_METADATA_FIELD,
)
from stripekit.common.core.config import settings
from stripekit.common.core.exceptions import ValidationError
from stripekit.common.core.telemetry import (
    get_logger,
    set_span_attributes,
    trace_span,
)
from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.licensing.directory import KeyDirectory
from stripekit.packages.licensing.keys import check_key_format, generate_license_key
from stripekit.packages.licensing.metering import UsageMeterReporter
from stripekit.packages.licensing.models.domain import (
    CustomerInfo,
    LicenseValidation,
    SubscriptionSummary,
)
from stripekit.packages.licensing.status import SubscriptionStatusEvaluator

logger = get_logger(__name__)


class LicenseService:
    """Validates license keys against live subscription state."""

    def __init__(
        self,
        provider: BillingProviderInterface,
        key_prefix: Optional[str] = None,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None,
    ):
        self.provider = provider
        self.key_prefix = key_prefix or settings.license_key_prefix
        self.directory = KeyDirectory(
            provider,
            page_size=page_size or settings.account_scan_page_size,
            max_pages=(
                max_pages if max_pages is not None else settings.account_scan_max_pages
            ),
        )
        self.status_evaluator = SubscriptionStatusEvaluator(provider)
        self.meter = UsageMeterReporter(provider)

    @trace_span
    async def validate_key(self, api_key: str, meter: bool = True) -> LicenseValidation:
        """
        Validate a license key.

        Args:
            api_key: The caller's license key
            meter: Report one unit of usage (billable calls). Passive status
                checks pass False.

        Raises:
            FormatError: Key is empty or lacks the production prefix
            NotFoundError: No account holds the key
            SubscriptionInactiveError: Account has no active subscription
            ProviderError: Upstream failure, including metering
        """
        check_key_format(api_key, self.key_prefix)
        account = await self.directory.find_by_key(api_key)
        set_span_attributes(customer_id=account.id)
        subscription = await self.status_evaluator.require_active(account)

        if meter:
            await self.meter.record_call(account, subscription)

        logger.info(
            "License key validated",
            extra={
                "customer_id": account.id,
                "subscription_id": subscription.id,
                "metered": meter,
            },
        )

        return LicenseValidation(
            customer_id=account.id,
            email=account.email,
            subscription_id=subscription.id,
            status=subscription.status,
            plan=account.plan,
        )

    async def check_status(self, api_key: str) -> LicenseValidation:
        """Validate without metering."""
        return await self.validate_key(api_key, meter=False)

    @trace_span
    async def customer_info(self, api_key: str) -> CustomerInfo:
        """Account details plus its most recent subscription of any status."""
        check_key_format(api_key, self.key_prefix)
        account = await self.directory.find_by_key(api_key)
        subscription = await self.status_evaluator.latest(account)

        summary = SubscriptionSummary()
        if subscription:
            summary = SubscriptionSummary(
                id=subscription.id,
                status=subscription.status,
                current_period_end=subscription.current_period_end,
                plan=account.plan or subscription.plan_nickname or "Unknown",
            )

        return CustomerInfo(
            customer_id=account.id,
            email=account.email,
            api_key=api_key,
            plan=account.plan,
            subscription=summary,
        )

    @trace_span
    async def generate_key(self, customer_id: str) -> str:
        """
        Issue a fresh key for an existing account, replacing any previous one.

        Raises:
            ValidationError: No customer id
            ProviderError: The account could not be updated
        """
        if not customer_id:
            raise ValidationError("No customer ID provided")

        api_key = generate_license_key(self.key_prefix)
        await self.provider.update_account_metadata(
            customer_id,
            {
                LICENSE_KEY_METADATA_FIELD: api_key,
                CREATED_AT_METADATA_FIELD: datetime.now(timezone.utc).isoformat(),
            },
        )

        logger.info("Generated license key", extra={"customer_id": customer_id})
        return api_key
