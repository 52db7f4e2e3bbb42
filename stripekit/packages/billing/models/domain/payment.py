"""
Domain models for one-off payments and checkout sessions.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PaymentIntentSummary(BaseModel):
    """Payment intent with the amount in decimal currency units."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    amount: float
    currency: str
    status: str
    client_secret: Optional[str] = None


class CheckoutSessionSummary(BaseModel):
    """Hosted checkout session for a subscription."""

    id: str
    url: Optional[str] = None
