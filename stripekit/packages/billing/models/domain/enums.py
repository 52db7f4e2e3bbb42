"""
Billing enums - strongly typed enumerations for provider-side billing state.
"""

from enum import Enum


class SubscriptionStatus(str, Enum):
    """
    Stripe subscription status values.

    Only ACTIVE grants entitlement; trialing and past_due accounts are refused.
    """

    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    PAUSED = "paused"

    def has_access(self) -> bool:
        """Check if this status allows product access."""
        return self is SubscriptionStatus.ACTIVE


class PriceUsageType(str, Enum):
    """How a recurring price accrues cost."""

    LICENSED = "licensed"  # Flat recurring charge
    METERED = "metered"  # Accrues from reported usage
