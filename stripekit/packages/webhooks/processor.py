"""
Webhook pipeline: verify, canonicalize, dispatch.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stripekit.common.core.constants import ErrorKind
from stripekit.common.core.exceptions import SignatureError
from stripekit.common.core.telemetry import (
    get_logger,
    set_span_attributes,
    trace_span,
)
from stripekit.packages.webhooks.dispatcher import dispatch
from stripekit.packages.webhooks.registry import HandlerRegistry
from stripekit.packages.webhooks.signature import DEFAULT_TOLERANCE, verify_signature
from stripekit.packages.webhooks.transformer import transform_event

logger = get_logger(__name__)


class WebhookResult(BaseModel):
    """Structured outcome of processing one webhook delivery."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    event_type: Optional[str] = None
    event_id: Optional[str] = None
    handled: bool = False
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    def to_response(self) -> dict[str, Any]:
        """Flatten into the ``{success, eventType}`` / ``{success, error}`` shape."""
        body: dict[str, Any] = {"success": self.success}
        if self.event_type:
            body["eventType"] = self.event_type
        if self.error:
            body["error"] = self.error
        return body


class WebhookProcessor:
    """
    Single entry point for inbound webhooks.

    Never raises: signature, canonicalization and handler failures all come
    back as a WebhookResult with ``success=False``.
    """

    def __init__(
        self,
        registry: Optional[HandlerRegistry] = None,
        webhook_secret: Optional[str] = None,
        tolerance: int = DEFAULT_TOLERANCE,
    ):
        self.registry = registry if registry is not None else HandlerRegistry()
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance

    @trace_span
    async def process(
        self,
        raw_body: Any,
        signature: Optional[str],
        secret: Optional[str] = None,
    ) -> WebhookResult:
        """
        Process a webhook delivery.

        Args:
            raw_body: Exact request body bytes
            signature: Stripe-Signature header value
            secret: Signing secret; defaults to the processor's configured one
        """
        try:
            event = verify_signature(
                raw_body, signature, secret or self.webhook_secret, self.tolerance
            )
        except SignatureError as e:
            return WebhookResult(
                success=False, error=e.message, error_kind=ErrorKind.SIGNATURE
            )

        set_span_attributes(event_id=event.id, event_type=event.type)
        logger.info(
            f"Received Stripe webhook: {event.type}",
            extra={
                "event_id": event.id,
                "event_type": event.type,
                "livemode": event.livemode,
            },
        )

        try:
            canonical = transform_event(event)
        except Exception as e:
            logger.error(
                f"Could not canonicalize webhook {event.id}: {e}",
                extra={"event_id": event.id, "event_type": event.type},
                exc_info=True,
            )
            return WebhookResult(
                success=False,
                event_type=event.type,
                event_id=event.id,
                error=str(e) or e.__class__.__name__,
                error_kind=ErrorKind.HANDLER,
            )

        outcome = await dispatch(self.registry, canonical, event)

        if not outcome.success:
            return WebhookResult(
                success=False,
                event_type=event.type,
                event_id=event.id,
                handled=True,
                error=outcome.error,
                error_kind=ErrorKind.HANDLER,
            )

        return WebhookResult(
            success=True,
            event_type=event.type,
            event_id=event.id,
            handled=outcome.handled,
        )
