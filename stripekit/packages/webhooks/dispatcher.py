"""
Dispatches canonical events to their registered handler.
"""

import inspect
from typing import Optional
from pydantic import BaseModel

from stripekit.common.core.telemetry import get_logger, log_span_event, trace_span
from stripekit.packages.webhooks.models.domain import CanonicalEvent, WebhookEvent
from stripekit.packages.webhooks.registry import HandlerRegistry

logger = get_logger(__name__)


class DispatchOutcome(BaseModel):
    """Result of invoking (or skipping) a handler."""

    handled: bool
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@trace_span
async def dispatch(
    registry: HandlerRegistry,
    canonical: CanonicalEvent,
    event: WebhookEvent,
) -> DispatchOutcome:
    """
    Invoke the handler registered for the canonical event's tag.

    No handler is a no-op success. A raising handler is reported as a failed
    outcome and never propagates. Handlers are not retried.
    """
    handler = registry.get(canonical.event_type)
    if handler is None:
        logger.info(
            f"No handler registered for {canonical.event_type}",
            extra={"event_id": event.id, "event_type": canonical.event_type},
        )
        return DispatchOutcome(handled=False)

    try:
        result = handler(canonical, event)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.error(
            f"Webhook handler for {canonical.event_type} failed: {e}",
            extra={
                "event_id": event.id,
                "event_type": canonical.event_type,
                "error": str(e),
            },
            exc_info=True,
        )
        return DispatchOutcome(handled=True, error=str(e) or e.__class__.__name__)

    log_span_event(
        f"Handled {canonical.event_type}",
        {"event_id": event.id, "event_type": canonical.event_type},
    )
    return DispatchOutcome(handled=True)
