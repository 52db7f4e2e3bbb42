"""
Unit tests for LicenseService.

The billing provider is mocked; the validation protocol runs for real.
"""

import pytest

from stripekit.common.core.exceptions import (
    FormatError,
    NotFoundError,
    ProviderError,
    SubscriptionInactiveError,
    ValidationError,
)
from stripekit.packages.billing.models.domain import SubscriptionStatus
from stripekit.packages.licensing.service import LicenseService
from tests.fixtures import VALID_KEY, make_account, make_page, make_subscription


@pytest.fixture
def license_service(mock_provider):
    mock_provider.list_accounts.return_value = make_page([make_account()])
    mock_provider.list_subscriptions.return_value = [make_subscription(metered=True)]
    return LicenseService(mock_provider)


@pytest.mark.asyncio
class TestValidateKey:
    async def test_valid_key(self, license_service, mock_provider):
        validation = await license_service.validate_key(VALID_KEY)

        assert validation.customer_id == "cus_test123"
        assert validation.email == "user@example.com"
        assert validation.subscription_id == "sub_test123"
        assert validation.status == SubscriptionStatus.ACTIVE
        assert validation.plan == "pro"
        mock_provider.report_usage.assert_awaited_once()

    async def test_every_call_is_metered(self, license_service, mock_provider):
        await license_service.validate_key(VALID_KEY)
        await license_service.validate_key(VALID_KEY)

        assert mock_provider.report_usage.await_count == 2

    async def test_format_checked_before_lookup(self, license_service, mock_provider):
        with pytest.raises(FormatError):
            await license_service.validate_key("sk_test_abc")

        mock_provider.list_accounts.assert_not_awaited()

    async def test_unknown_key(self, license_service):
        with pytest.raises(NotFoundError):
            await license_service.validate_key("sk_prod_unknown")

    async def test_canceled_subscription(self, license_service, mock_provider):
        mock_provider.list_subscriptions.return_value = []

        with pytest.raises(SubscriptionInactiveError):
            await license_service.validate_key(VALID_KEY)

        mock_provider.report_usage.assert_not_awaited()

    async def test_metering_failure_fails_validation(
        self, license_service, mock_provider
    ):
        mock_provider.report_usage.side_effect = ProviderError("Meter unavailable")

        with pytest.raises(ProviderError):
            await license_service.validate_key(VALID_KEY)

    async def test_check_status_is_not_metered(self, license_service, mock_provider):
        validation = await license_service.check_status(VALID_KEY)

        assert validation.customer_id == "cus_test123"
        mock_provider.report_usage.assert_not_awaited()


@pytest.mark.asyncio
class TestCustomerInfo:
    async def test_info_with_subscription(self, license_service):
        info = await license_service.customer_info(VALID_KEY)

        assert info.customer_id == "cus_test123"
        assert info.api_key == VALID_KEY
        assert info.subscription.id == "sub_test123"
        assert info.subscription.plan == "pro"

    async def test_plan_falls_back_to_price_nickname(
        self, license_service, mock_provider
    ):
        mock_provider.list_accounts.return_value = make_page([make_account(plan=None)])

        info = await license_service.customer_info(VALID_KEY)

        assert info.subscription.plan == "Pro Monthly"

    async def test_info_without_subscription(self, license_service, mock_provider):
        mock_provider.list_subscriptions.return_value = []

        info = await license_service.customer_info(VALID_KEY)

        assert info.subscription.id is None
        assert info.subscription.plan == "Unknown"

    async def test_info_is_not_metered(self, license_service, mock_provider):
        await license_service.customer_info(VALID_KEY)

        mock_provider.report_usage.assert_not_awaited()


@pytest.mark.asyncio
class TestGenerateKey:
    async def test_generates_and_stores_key(self, license_service, mock_provider):
        api_key = await license_service.generate_key("cus_test123")

        assert api_key.startswith("sk_prod_")
        args, _ = mock_provider.update_account_metadata.await_args
        assert args[0] == "cus_test123"
        assert args[1]["apiKey"] == api_key
        assert "createdAt" in args[1]

    async def test_missing_customer_id(self, license_service, mock_provider):
        with pytest.raises(ValidationError):
            await license_service.generate_key("")

        mock_provider.update_account_metadata.assert_not_awaited()
