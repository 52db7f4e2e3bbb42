"""Domain models for licensing."""

from stripekit.packages.licensing.models.domain.license import (
    LicenseValidation,
    UsageRecord,
    SubscriptionSummary,
    CustomerInfo,
)

__all__ = [
    "LicenseValidation",
    "UsageRecord",
    "SubscriptionSummary",
    "CustomerInfo",
]
