"""
Unit tests for ProvisioningService and the plan catalog.

The billing provider is mocked; the provisioning flow runs for real.
"""

import pytest

from stripekit.common.core.config import Settings
from stripekit.common.core.exceptions import (
    ProviderError,
    SubscriptionInactiveError,
    ValidationError,
)
from stripekit.packages.billing.models.domain import SubscriptionStatus
from stripekit.packages.provisioning.plans import Plan, PlanCatalog
from stripekit.packages.provisioning.service import ProvisioningService
from tests.fixtures import make_account, make_subscription

SIGNUP = {
    "email": "new@example.com",
    "name": "New User",
    "payment_method_id": "pm_card_visa",
    "plan": "pro",
}


@pytest.fixture
def provisioning_service(mock_provider, plan_catalog):
    mock_provider.find_account_by_email.return_value = None
    mock_provider.create_account.return_value = make_account(
        id="cus_new", api_key=None, plan=None
    )
    mock_provider.update_account_metadata.return_value = make_account(id="cus_new")
    mock_provider.create_subscription.return_value = make_subscription(
        id="sub_new", customer_id="cus_new"
    )
    return ProvisioningService(mock_provider, catalog=plan_catalog)


@pytest.mark.asyncio
class TestProvision:
    async def test_new_account(self, provisioning_service, mock_provider):
        outcome = await provisioning_service.provision(**SIGNUP)

        assert outcome.api_key.startswith("sk_prod_")
        assert outcome.customer_id == "cus_new"
        assert outcome.subscription_id == "sub_new"
        assert outcome.plan == "pro"
        mock_provider.create_account.assert_awaited_once_with(
            "new@example.com", "New User", payment_method_id="pm_card_visa"
        )
        mock_provider.attach_payment_method.assert_not_awaited()

    async def test_key_stored_before_subscription(
        self, provisioning_service, mock_provider
    ):
        steps = []
        mock_provider.update_account_metadata.side_effect = (
            lambda *args, **kwargs: steps.append("metadata")
        )
        mock_provider.create_subscription.side_effect = lambda *args, **kwargs: (
            steps.append("subscription") or make_subscription(id="sub_new")
        )

        outcome = await provisioning_service.provision(**SIGNUP)

        assert steps == ["metadata", "subscription"]
        metadata = mock_provider.update_account_metadata.await_args.args[1]
        assert metadata["apiKey"] == outcome.api_key
        assert metadata["plan"] == "pro"
        assert "createdAt" in metadata

    async def test_hybrid_plan_subscribes_to_both_prices(
        self, provisioning_service, mock_provider
    ):
        await provisioning_service.provision(**SIGNUP)

        mock_provider.create_subscription.assert_awaited_once_with(
            "cus_new", ["price_pro", "price_pro_metered"]
        )

    async def test_flat_plan(self, provisioning_service, mock_provider):
        await provisioning_service.provision(**{**SIGNUP, "plan": "starter"})

        mock_provider.create_subscription.assert_awaited_once_with(
            "cus_new", ["price_starter"]
        )

    async def test_existing_account_reused(self, provisioning_service, mock_provider):
        mock_provider.find_account_by_email.return_value = make_account(
            id="cus_existing"
        )

        outcome = await provisioning_service.provision(**SIGNUP)

        assert outcome.customer_id == "cus_existing"
        mock_provider.create_account.assert_not_awaited()
        mock_provider.attach_payment_method.assert_awaited_once_with(
            "cus_existing", "pm_card_visa"
        )

    @pytest.mark.parametrize("missing", ["email", "name", "payment_method_id", "plan"])
    async def test_missing_field(self, provisioning_service, mock_provider, missing):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await provisioning_service.provision(**{**SIGNUP, missing: None})

        mock_provider.find_account_by_email.assert_not_awaited()

    async def test_invalid_plan_makes_no_remote_call(
        self, provisioning_service, mock_provider
    ):
        with pytest.raises(ValidationError, match="Invalid plan selected"):
            await provisioning_service.provision(**{**SIGNUP, "plan": "platinum"})

        assert mock_provider.method_calls == []

    async def test_declined_card_returns_no_key(
        self, provisioning_service, mock_provider
    ):
        mock_provider.create_subscription.side_effect = ProviderError(
            "Your card was declined."
        )

        with pytest.raises(ProviderError, match="declined"):
            await provisioning_service.provision(**SIGNUP)

        # The key was already written; nothing is rolled back
        mock_provider.update_account_metadata.assert_awaited_once()

    async def test_inactive_subscription_fails_signup(
        self, provisioning_service, mock_provider
    ):
        mock_provider.create_subscription.return_value = make_subscription(
            status=SubscriptionStatus.INCOMPLETE
        )

        with pytest.raises(SubscriptionInactiveError, match="incomplete"):
            await provisioning_service.provision(**SIGNUP)


class TestPlanCatalog:
    def test_resolve(self, plan_catalog):
        prices = plan_catalog.resolve("pro")
        assert prices.plan == Plan.PRO
        assert prices.price_ids == ["price_pro", "price_pro_metered"]

    @pytest.mark.parametrize("plan", [None, "", "platinum", "enterprise"])
    def test_unknown_or_unconfigured(self, plan_catalog, plan):
        with pytest.raises(ValidationError):
            plan_catalog.resolve(plan)

    def test_from_settings_skips_unpriced_plans(self):
        catalog = PlanCatalog.from_settings(
            Settings(
                stripe_price_id_starter="price_s",
                stripe_price_id_pay_as_you_go="price_p",
                stripe_metered_price_id_pay_as_you_go="price_p_metered",
            )
        )

        assert [p.plan for p in catalog.available()] == [
            Plan.STARTER,
            Plan.PAY_AS_YOU_GO,
        ]
        assert catalog.resolve("pay_as_you_go").metered_price_id == "price_p_metered"
