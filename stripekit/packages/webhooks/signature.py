"""
Webhook signature verification.

Verification runs over the exact raw request body. A body that has been
parsed and re-serialized no longer matches the signed digest.
"""

import json
from typing import Any, Optional
import stripe

from stripekit.common.core.exceptions import SignatureError
from stripekit.common.core.telemetry import get_logger
from stripekit.packages.webhooks.models.domain import WebhookEvent

logger = get_logger(__name__)

DEFAULT_TOLERANCE = 300


def verify_signature(
    payload: Any,
    signature: Optional[str],
    secret: Optional[str],
    tolerance: int = DEFAULT_TOLERANCE,
) -> WebhookEvent:
    """
    Authenticate a webhook payload and parse it into a typed event.

    Args:
        payload: Raw request body (bytes, or the undecoded text)
        signature: Value of the Stripe-Signature header
        secret: Webhook signing secret
        tolerance: Maximum age in seconds of the signed timestamp

    Raises:
        SignatureError: On any authentication or parse failure
    """
    if not isinstance(payload, (bytes, bytearray, str)):
        raise SignatureError("Webhook Error: payload must be the raw request body")
    if not signature:
        raise SignatureError("Webhook Error: missing stripe-signature header")
    if not secret:
        raise SignatureError("Webhook Error: webhook signing secret not configured")

    try:
        raw = payload if isinstance(payload, str) else bytes(payload).decode("utf-8")
    except UnicodeDecodeError as e:
        raise SignatureError("Webhook Error: payload is not valid UTF-8") from e

    try:
        stripe.WebhookSignature.verify_header(raw, signature, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        logger.warning(f"Stripe webhook signature verification failed: {e}")
        raise SignatureError(f"Webhook Error: {e}") from e

    try:
        return WebhookEvent.model_validate(json.loads(raw))
    except ValueError as e:
        # json and pydantic validation errors are both ValueErrors
        logger.error(f"Invalid Stripe webhook payload: {e}")
        raise SignatureError("Webhook Error: invalid payload") from e
