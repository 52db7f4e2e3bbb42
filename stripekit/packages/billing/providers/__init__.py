"""Billing providers - the remote ledger that owns accounts and subscriptions."""

from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.billing.providers.factory import get_billing_provider

__all__ = [
    "BillingProviderInterface",
    "get_billing_provider",
]
