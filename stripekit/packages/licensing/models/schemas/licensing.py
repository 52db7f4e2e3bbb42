"""
API schemas for licensing operations.

Request and response models for the key endpoints. Wire names are camelCase.
"""

from typing import Optional

from stripekit.common.core.schemas import CamelModel
from stripekit.packages.licensing.models.domain import (
    CustomerInfo,
    LicenseValidation,
)


# ============================================================================
# Requests
# ============================================================================


class ApiKeyRequest(CamelModel):
    """Request carrying a license key. Missing keys are answered with a 400."""

    api_key: Optional[str] = None


class GenerateKeyRequest(CamelModel):
    """Request to issue a key for an existing account."""

    customer_id: Optional[str] = None


# ============================================================================
# Responses
# ============================================================================


class ValidateKeyResponse(LicenseValidation):
    """Key is valid and its subscription active."""

    valid: bool = True


class ValidateKeyFailure(CamelModel):
    valid: bool = False
    error: str


class GenerateKeyResponse(CamelModel):
    success: bool = True
    api_key: str
    message: str = "API key generated. Use this to initialize StripeKit."


class CustomerInfoResponse(CustomerInfo):
    success: bool = True
