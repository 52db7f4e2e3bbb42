"""
Provisioning flow: turns a new paying signup into an account, a license key
and an active subscription.
"""

from datetime import datetime, timezone
from typing import Optional

from stripekit.common.core.config import settings
from stripekit.common.core.constants import (
    CREATED_AT_METADATA_FIELD,
    LICENSE_KEY_METADATA_FIELD,
    PLAN_METADATA_FIELD,
)
from stripekit.common.core.exceptions import (
    SubscriptionInactiveError,
    ValidationError,
)
from stripekit.common.core.telemetry import get_logger, trace_span
from stripekit.packages.billing.models.domain import BillingAccount
from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.licensing.keys import generate_license_key
from stripekit.packages.provisioning.models.domain import ProvisioningOutcome
from stripekit.packages.provisioning.plans import PlanCatalog

logger = get_logger(__name__)


class ProvisioningService:
    """Orchestrates signup against the billing provider."""

    def __init__(
        self,
        provider: BillingProviderInterface,
        catalog: Optional[PlanCatalog] = None,
        key_prefix: Optional[str] = None,
    ):
        self.provider = provider
        self.catalog = catalog or PlanCatalog.from_settings()
        self.key_prefix = key_prefix or settings.license_key_prefix

    @trace_span
    async def provision(
        self,
        email: Optional[str],
        name: Optional[str],
        payment_method_id: Optional[str],
        plan: Optional[str],
    ) -> ProvisioningOutcome:
        """
        Provision a paying user.

        Each step aborts the rest on failure. The key is written to the account
        before the subscription is created, so a crash in between leaves a
        keyed account that validates as inactive. Nothing is rolled back.

        Raises:
            ValidationError: Missing fields or unknown plan (no remote calls made)
            SubscriptionInactiveError: Subscription was created but is not active
            ProviderError: Any upstream failure, e.g. a declined payment method
        """
        if not email or not name or not payment_method_id or not plan:
            raise ValidationError(
                "Missing required fields: email, name, paymentMethodId, plan"
            )
        prices = self.catalog.resolve(plan)

        # Step 1: Find or create the account
        account = await self._find_or_create_account(email, name, payment_method_id)

        # Step 2: Generate the key
        api_key = generate_license_key(self.key_prefix)

        # Step 3: Store key and plan on the account
        await self.provider.update_account_metadata(
            account.id,
            {
                LICENSE_KEY_METADATA_FIELD: api_key,
                PLAN_METADATA_FIELD: prices.plan.value,
                CREATED_AT_METADATA_FIELD: datetime.now(timezone.utc).isoformat(),
            },
        )

        # Step 4: Subscribe
        subscription = await self.provider.create_subscription(
            account.id, prices.price_ids
        )

        # Step 5: Anything but active is a failed signup
        if not subscription.has_access():
            logger.error(
                "Subscription not active after provisioning, needs manual reconciliation",
                extra={
                    "customer_id": account.id,
                    "subscription_id": subscription.id,
                    "status": subscription.status.value,
                },
            )
            raise SubscriptionInactiveError(
                f"Subscription could not be activated: {subscription.status.value}"
            )

        logger.info(
            "Provisioned subscription",
            extra={
                "customer_id": account.id,
                "subscription_id": subscription.id,
                "plan": prices.plan.value,
            },
        )

        return ProvisioningOutcome(
            api_key=api_key,
            customer_id=account.id,
            subscription_id=subscription.id,
            plan=prices.plan.value,
        )

    async def _find_or_create_account(
        self, email: str, name: str, payment_method_id: str
    ) -> BillingAccount:
        account = await self.provider.find_account_by_email(email)

        if account is None:
            account = await self.provider.create_account(
                email, name, payment_method_id=payment_method_id
            )
            logger.info(
                "Created billing account", extra={"customer_id": account.id}
            )
            return account

        # Reused accounts need the new payment method as their default
        await self.provider.attach_payment_method(account.id, payment_method_id)
        logger.info(
            "Reusing existing billing account", extra={"customer_id": account.id}
        )
        return account
