"""
Factory for getting billing provider instance.
"""

from typing import Optional

from stripekit.common.core.config import settings
from stripekit.common.core.exceptions import ProviderError
from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.billing.providers.stripe_provider import StripeBillingProvider


def get_billing_provider(secret_key: Optional[str] = None) -> BillingProviderInterface:
    """
    Get billing provider instance.

    Args:
        secret_key: Stripe secret key; falls back to the configured one

    Returns:
        BillingProviderInterface: Configured billing provider

    Raises:
        ProviderError: When no secret key is available
    """
    key = secret_key or settings.stripe_secret_key
    if not key:
        raise ProviderError("Stripe not configured")
    return StripeBillingProvider(key, timeout=settings.stripe_timeout)
