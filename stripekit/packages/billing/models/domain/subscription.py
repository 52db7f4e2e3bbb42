"""
Domain models for subscriptions and their line items.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from stripekit.packages.billing.models.domain.enums import (
    PriceUsageType,
    SubscriptionStatus,
)


class Price(BaseModel):
    """Recurring price referenced by a subscription line item."""

    id: str
    nickname: Optional[str] = None
    usage_type: PriceUsageType = PriceUsageType.LICENSED
    meter_id: Optional[str] = None

    @property
    def is_metered(self) -> bool:
        return self.usage_type == PriceUsageType.METERED


class SubscriptionItem(BaseModel):
    """Subscription line item."""

    id: str
    price: Price


class Subscription(BaseModel):
    """
    Remote-owned subscription.

    Items are kept in provider order; at most one metered item is expected.
    """

    id: str
    customer_id: str
    status: SubscriptionStatus
    current_period_end: Optional[datetime] = None
    items: list[SubscriptionItem] = Field(default_factory=list)

    def has_access(self) -> bool:
        """Check if subscription allows product access."""
        return self.status.has_access()

    @property
    def metered_item(self) -> Optional[SubscriptionItem]:
        return next((item for item in self.items if item.price.is_metered), None)

    @property
    def plan_nickname(self) -> Optional[str]:
        return self.items[0].price.nickname if self.items else None
