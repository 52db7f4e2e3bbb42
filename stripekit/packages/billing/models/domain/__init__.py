"""Domain models for billing."""

from stripekit.packages.billing.models.domain.enums import (
    SubscriptionStatus,
    PriceUsageType,
)
from stripekit.packages.billing.models.domain.account import (
    BillingAccount,
    AccountPage,
)
from stripekit.packages.billing.models.domain.subscription import (
    Price,
    SubscriptionItem,
    Subscription,
)
from stripekit.packages.billing.models.domain.payment import (
    PaymentIntentSummary,
    CheckoutSessionSummary,
)

__all__ = [
    # Enums
    "SubscriptionStatus",
    "PriceUsageType",
    # Accounts
    "BillingAccount",
    "AccountPage",
    # Subscriptions
    "Price",
    "SubscriptionItem",
    "Subscription",
    # Payments
    "PaymentIntentSummary",
    "CheckoutSessionSummary",
]
