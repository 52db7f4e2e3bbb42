"""
License key API routes.

Public endpoints: the license key itself is the credential.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from stripekit.common.core.config import settings
from stripekit.common.core.exceptions import AppException
from stripekit.common.core.schemas import ErrorResponse
from stripekit.common.providers.rate_limiter.limiter import limiter
from stripekit.packages.licensing.dependencies import get_license_service
from stripekit.packages.licensing.models.schemas.licensing import (
    ApiKeyRequest,
    CustomerInfoResponse,
    GenerateKeyRequest,
    GenerateKeyResponse,
    ValidateKeyFailure,
    ValidateKeyResponse,
)
from stripekit.packages.licensing.service import LicenseService

router = APIRouter()


def _failure(exc: AppException, body) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content=body.model_dump(by_alias=True)
    )


# ============================================================================
# Validation
# ============================================================================


@router.post("/validate-key", response_model=ValidateKeyResponse)
@limiter.limit(settings.validate_key_rate_limit)
async def validate_key(
    request: Request,
    body: ApiKeyRequest,
    license_service: LicenseService = Depends(get_license_service),
):
    """
    Validate a license key and meter one billable call.

    401 for malformed or unknown keys, 402 when the subscription is not active.
    """
    if not body.api_key:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidateKeyFailure(error="No API key provided").model_dump(),
        )

    try:
        validation = await license_service.validate_key(body.api_key)
    except AppException as e:
        return _failure(e, ValidateKeyFailure(error=e.message))

    return ValidateKeyResponse(**validation.model_dump())


# ============================================================================
# Key issuance
# ============================================================================


@router.post("/generate-key", response_model=GenerateKeyResponse)
async def generate_key(
    body: GenerateKeyRequest,
    license_service: LicenseService = Depends(get_license_service),
):
    """Issue a new key for an existing account (e.g. after a successful payment)."""
    if not body.customer_id:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error="No customer ID provided").model_dump(),
        )

    try:
        api_key = await license_service.generate_key(body.customer_id)
    except AppException as e:
        return _failure(e, ErrorResponse(error=e.message))

    return GenerateKeyResponse(api_key=api_key)


# ============================================================================
# Dashboard
# ============================================================================


@router.post("/customer-info", response_model=CustomerInfoResponse)
@limiter.limit(settings.validate_key_rate_limit)
async def customer_info(
    request: Request,
    body: ApiKeyRequest,
    license_service: LicenseService = Depends(get_license_service),
):
    """Account and subscription summary for the key's owner. Not metered."""
    if not body.api_key:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error="No API key provided").model_dump(),
        )

    try:
        info = await license_service.customer_info(body.api_key)
    except AppException as e:
        return _failure(e, ErrorResponse(error=e.message))

    return CustomerInfoResponse(**info.model_dump())
