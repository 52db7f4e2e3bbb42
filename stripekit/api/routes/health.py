from fastapi import APIRouter, Depends, Request

from stripekit.common.core.telemetry import get_logger
from stripekit.common.providers.rate_limiter.limiter import limiter
from stripekit.packages.billing.dependencies import get_provider
from stripekit.packages.billing.providers.interface import BillingProviderInterface

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    # No rate limiting or logging - probes hit this constantly
    return {"status": "ok", "message": "StripeKit API is running"}


@router.get("/health/provider")
@limiter.limit("100/minute")
async def provider_check(
    request: Request,
    provider: BillingProviderInterface = Depends(get_provider),
):
    if await provider.health_check():
        return {"status": "healthy", "provider": "connected"}
    logger.error("Billing provider health check failed")
    return {"status": "unhealthy", "provider": "disconnected"}
