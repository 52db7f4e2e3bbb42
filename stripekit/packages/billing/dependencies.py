"""FastAPI dependencies for the billing provider."""

from functools import lru_cache

from stripekit.packages.billing.providers import (
    BillingProviderInterface,
    get_billing_provider,
)


@lru_cache
def get_provider() -> BillingProviderInterface:
    """Configured provider, built once. Raises ProviderError when unconfigured."""
    return get_billing_provider()
