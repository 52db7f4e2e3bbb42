"""FastAPI dependencies for provisioning endpoints."""

from functools import lru_cache

from fastapi import Depends

from stripekit.packages.billing.dependencies import get_provider
from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.provisioning.plans import PlanCatalog
from stripekit.packages.provisioning.service import ProvisioningService


@lru_cache
def get_plan_catalog() -> PlanCatalog:
    return PlanCatalog.from_settings()


def get_provisioning_service(
    provider: BillingProviderInterface = Depends(get_provider),
    catalog: PlanCatalog = Depends(get_plan_catalog),
) -> ProvisioningService:
    return ProvisioningService(provider, catalog=catalog)
