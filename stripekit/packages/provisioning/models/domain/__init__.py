"""Domain models for provisioning."""

from stripekit.packages.provisioning.models.domain.provisioning import (
    ProvisioningOutcome,
)

__all__ = ["ProvisioningOutcome"]
