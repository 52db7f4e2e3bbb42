"""
Domain models for provisioning.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProvisioningOutcome(BaseModel):
    """A new paying signup: account, license key and active subscription."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    api_key: str
    customer_id: str
    subscription_id: str
    plan: str
