"""
API schemas for provisioning.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stripekit.packages.provisioning.models.domain import ProvisioningOutcome


class CreateSubscriptionRequest(BaseModel):
    """Signup request. Missing fields are answered with a 400, not a 422."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: Optional[str] = None
    name: Optional[str] = None
    payment_method_id: Optional[str] = None
    plan: Optional[str] = None


class CreateSubscriptionResponse(ProvisioningOutcome):
    success: bool = True
    message: str = (
        "Subscription created successfully. Use your API key to initialize StripeKit."
    )


class PlanResponse(BaseModel):
    """A plan offered at signup."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plan: str
    hybrid: bool = Field(..., description="Whether the plan also bills metered usage")


class PlansResponse(BaseModel):
    plans: list[PlanResponse]
