"""
Webhook endpoint for billing events.

Public endpoint (no auth) - the Stripe signature is verified internally.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from stripekit.common.core.constants import ErrorKind
from stripekit.packages.webhooks.dependencies import get_webhook_processor
from stripekit.packages.webhooks.processor import WebhookProcessor

router = APIRouter()


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    processor: WebhookProcessor = Depends(get_webhook_processor),
):
    """
    Receive webhook events from Stripe.

    Unauthenticated payloads get a 400 so they are never acknowledged.
    Handler failures are reported in the body with a 200.
    """
    # Raw body: re-serialized JSON would not match the signature
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    result = await processor.process(payload, signature)

    status_code = (
        status.HTTP_400_BAD_REQUEST
        if result.error_kind == ErrorKind.SIGNATURE
        else status.HTTP_200_OK
    )
    return JSONResponse(status_code=status_code, content=result.to_response())
