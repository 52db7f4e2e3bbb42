"""
Plan catalog: maps plan names to their Stripe price IDs.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel

from stripekit.common.core.config import Settings, settings as default_settings
from stripekit.common.core.exceptions import ValidationError


class Plan(str, Enum):
    """Plans offered at signup."""

    STARTER = "starter"
    PRO = "pro"
    ENTERPRISE = "enterprise"
    PAY_AS_YOU_GO = "pay_as_you_go"


class PlanPrices(BaseModel):
    """
    Prices a plan subscribes to.

    A flat recurring price, plus an optional metered price for hybrid billing.
    """

    plan: Plan
    flat_price_id: str
    metered_price_id: Optional[str] = None

    @property
    def price_ids(self) -> list[str]:
        if self.metered_price_id:
            return [self.flat_price_id, self.metered_price_id]
        return [self.flat_price_id]


class PlanCatalog:
    """Plans with a configured flat price."""

    def __init__(self, plans: dict[Plan, PlanPrices]):
        self._plans = plans

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PlanCatalog":
        settings = settings or default_settings
        plans = {}
        for plan in Plan:
            flat = getattr(settings, f"stripe_price_id_{plan.value}")
            if not flat:
                continue
            plans[plan] = PlanPrices(
                plan=plan,
                flat_price_id=flat,
                metered_price_id=getattr(
                    settings, f"stripe_metered_price_id_{plan.value}"
                ),
            )
        return cls(plans)

    def resolve(self, plan: Optional[str]) -> PlanPrices:
        """
        Look up a plan by name.

        Raises:
            ValidationError: Unknown or unconfigured plan
        """
        try:
            return self._plans[Plan(plan)]
        except (KeyError, ValueError):
            raise ValidationError("Invalid plan selected")

    def available(self) -> list[PlanPrices]:
        return list(self._plans.values())
