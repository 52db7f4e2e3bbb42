"""
Domain models for billing accounts (Stripe customers).
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from stripekit.common.core.constants import (
    LICENSE_KEY_METADATA_FIELD,
    PLAN_METADATA_FIELD,
)


class BillingAccount(BaseModel):
    """
    Remote-owned billing account.

    The license key and plan live in ``metadata``; there is no local key table.
    """

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    metadata: dict[str, str] = Field(default_factory=dict)
    created: Optional[datetime] = None

    @property
    def license_key(self) -> Optional[str]:
        return self.metadata.get(LICENSE_KEY_METADATA_FIELD)

    @property
    def plan(self) -> Optional[str]:
        return self.metadata.get(PLAN_METADATA_FIELD)


class AccountPage(BaseModel):
    """One page of a cursor-paginated account listing."""

    accounts: list[BillingAccount] = Field(default_factory=list)
    has_more: bool = False

    @property
    def last_id(self) -> Optional[str]:
        return self.accounts[-1].id if self.accounts else None
