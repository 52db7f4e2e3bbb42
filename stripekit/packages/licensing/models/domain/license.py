"""
Domain models for license validation and usage metering.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stripekit.packages.billing.models.domain import SubscriptionStatus


class LicenseValidation(BaseModel):
    """A license key that resolved to an entitled account."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_id: str
    email: Optional[str] = None
    subscription_id: str
    status: SubscriptionStatus
    plan: Optional[str] = None


class UsageRecord(BaseModel):
    """One usage increment submitted for a metered line item."""

    account_id: str
    subscription_id: str
    subscription_item_id: str
    quantity: int
    timestamp: datetime


class SubscriptionSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    status: Optional[SubscriptionStatus] = None
    current_period_end: Optional[datetime] = None
    plan: str = "Unknown"


class CustomerInfo(BaseModel):
    """Account and latest subscription, for dashboards."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_id: str
    email: Optional[str] = None
    api_key: str
    plan: Optional[str] = None
    subscription: SubscriptionSummary
