"""
Subscription signup routes.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from stripekit.common.core.config import settings
from stripekit.common.core.exceptions import AppException, SubscriptionInactiveError
from stripekit.common.providers.rate_limiter.limiter import limiter
from stripekit.common.core.schemas import ErrorResponse
from stripekit.packages.provisioning.dependencies import (
    get_plan_catalog,
    get_provisioning_service,
)
from stripekit.packages.provisioning.models.schemas.provisioning import (
    CreateSubscriptionRequest,
    CreateSubscriptionResponse,
    PlanResponse,
    PlansResponse,
)
from stripekit.packages.provisioning.plans import PlanCatalog
from stripekit.packages.provisioning.service import ProvisioningService

router = APIRouter()


@router.post("/create-subscription", response_model=CreateSubscriptionResponse)
@limiter.limit(settings.validate_key_rate_limit)
async def create_subscription(
    request: Request,
    body: CreateSubscriptionRequest,
    provisioning_service: ProvisioningService = Depends(get_provisioning_service),
):
    """
    Sign up a paying user and return their license key.

    No key is returned unless the subscription ends up active.
    """
    try:
        outcome = await provisioning_service.provision(
            email=body.email,
            name=body.name,
            payment_method_id=body.payment_method_id,
            plan=body.plan,
        )
    except AppException as e:
        # A subscription that did not activate is a failed signup, not a 402
        status_code = (
            status.HTTP_400_BAD_REQUEST
            if isinstance(e, SubscriptionInactiveError)
            else e.status_code
        )
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=e.message).model_dump(),
        )

    return CreateSubscriptionResponse(**outcome.model_dump())


@router.get("/plans", response_model=PlansResponse)
async def list_plans(catalog: PlanCatalog = Depends(get_plan_catalog)):
    """Plans currently offered at signup (those with a configured price)."""
    return PlansResponse(
        plans=[
            PlanResponse(
                plan=prices.plan.value, hybrid=prices.metered_price_id is not None
            )
            for prices in catalog.available()
        ]
    )
