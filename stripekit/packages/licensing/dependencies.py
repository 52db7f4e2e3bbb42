"""FastAPI dependencies for licensing endpoints."""

from fastapi import Depends

from stripekit.packages.billing.dependencies import get_provider
from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.licensing.service import LicenseService


def get_license_service(
    provider: BillingProviderInterface = Depends(get_provider),
) -> LicenseService:
    return LicenseService(provider)
