# Shared pytest configuration and fixtures for all test types
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import AsyncMock, patch

from stripekit.packages.billing.providers.interface import BillingProviderInterface
from tests.fixtures import WEBHOOK_SECRET

# Test limiter: in-memory and switched off so suites never hit the limits
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
    enabled=False,
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("stripekit.common.providers.rate_limiter.limiter.limiter", test_limiter):
    from stripekit.api.main import app

from stripekit.packages.billing.dependencies import get_provider
from stripekit.packages.provisioning.dependencies import get_plan_catalog
from stripekit.packages.provisioning.plans import Plan, PlanCatalog, PlanPrices
from stripekit.packages.webhooks.dependencies import get_webhook_processor
from stripekit.packages.webhooks.processor import WebhookProcessor
from stripekit.packages.webhooks.registry import HandlerRegistry


@pytest.fixture
def mock_provider():
    """Billing provider double; every method is an AsyncMock."""
    return AsyncMock(spec=BillingProviderInterface)


@pytest.fixture
def plan_catalog():
    """Catalog with a flat plan and a hybrid (flat + metered) plan."""
    return PlanCatalog(
        {
            Plan.STARTER: PlanPrices(plan=Plan.STARTER, flat_price_id="price_starter"),
            Plan.PRO: PlanPrices(
                plan=Plan.PRO,
                flat_price_id="price_pro",
                metered_price_id="price_pro_metered",
            ),
        }
    )


@pytest.fixture
def webhook_registry():
    return HandlerRegistry()


@pytest.fixture
def webhook_processor(webhook_registry):
    return WebhookProcessor(webhook_registry, webhook_secret=WEBHOOK_SECRET)


@pytest_asyncio.fixture(scope="function")
async def client(mock_provider, plan_catalog, webhook_processor):
    """Create a test client with the billing provider mocked out."""
    app.dependency_overrides[get_provider] = lambda: mock_provider
    app.dependency_overrides[get_plan_catalog] = lambda: plan_catalog
    app.dependency_overrides[get_webhook_processor] = lambda: webhook_processor

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
