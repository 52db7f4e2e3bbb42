"""
Unit tests for SubscriptionStatusEvaluator and UsageMeterReporter.
"""

import pytest

from stripekit.common.core.exceptions import ProviderError, SubscriptionInactiveError
from stripekit.packages.billing.models.domain import SubscriptionStatus
from stripekit.packages.licensing.metering import UsageMeterReporter
from stripekit.packages.licensing.status import SubscriptionStatusEvaluator
from tests.fixtures import make_account, make_subscription


@pytest.mark.asyncio
class TestSubscriptionStatusEvaluator:
    async def test_active(self, mock_provider):
        mock_provider.list_subscriptions.return_value = [make_subscription()]

        subscription = await SubscriptionStatusEvaluator(
            mock_provider
        ).require_active(make_account())

        assert subscription.id == "sub_test123"
        mock_provider.list_subscriptions.assert_awaited_once_with(
            "cus_test123", status=SubscriptionStatus.ACTIVE, limit=1
        )

    async def test_no_subscription(self, mock_provider):
        mock_provider.list_subscriptions.return_value = []

        with pytest.raises(SubscriptionInactiveError):
            await SubscriptionStatusEvaluator(mock_provider).require_active(
                make_account()
            )

    @pytest.mark.parametrize(
        "status", [SubscriptionStatus.PAST_DUE, SubscriptionStatus.CANCELED]
    )
    async def test_non_active_refused(self, mock_provider, status):
        mock_provider.list_subscriptions.return_value = [
            make_subscription(status=status)
        ]

        with pytest.raises(SubscriptionInactiveError):
            await SubscriptionStatusEvaluator(mock_provider).require_active(
                make_account()
            )

    async def test_latest_any_status(self, mock_provider):
        mock_provider.list_subscriptions.return_value = [
            make_subscription(status=SubscriptionStatus.CANCELED)
        ]

        subscription = await SubscriptionStatusEvaluator(mock_provider).latest(
            make_account()
        )

        assert subscription.status == SubscriptionStatus.CANCELED
        mock_provider.list_subscriptions.assert_awaited_once_with(
            "cus_test123", limit=1
        )

    async def test_latest_none(self, mock_provider):
        mock_provider.list_subscriptions.return_value = []

        assert (
            await SubscriptionStatusEvaluator(mock_provider).latest(make_account())
            is None
        )


@pytest.mark.asyncio
class TestUsageMeterReporter:
    async def test_reports_one_unit(self, mock_provider):
        subscription = make_subscription(metered=True)

        record = await UsageMeterReporter(mock_provider).record_call(
            make_account(), subscription
        )

        mock_provider.report_usage.assert_awaited_once()
        args, kwargs = mock_provider.report_usage.await_args
        assert args[0] == "cus_test123"
        assert args[1].id == "si_metered"
        assert kwargs["quantity"] == 1
        assert record.subscription_item_id == "si_metered"
        assert record.quantity == 1

    async def test_flat_plan_skipped(self, mock_provider):
        record = await UsageMeterReporter(mock_provider).record_call(
            make_account(), make_subscription(metered=False)
        )

        assert record is None
        mock_provider.report_usage.assert_not_awaited()

    async def test_report_failure_propagates(self, mock_provider):
        mock_provider.report_usage.side_effect = ProviderError("Meter unavailable")

        with pytest.raises(ProviderError):
            await UsageMeterReporter(mock_provider).record_call(
                make_account(), make_subscription(metered=True)
            )
