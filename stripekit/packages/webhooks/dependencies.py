"""FastAPI dependencies for the webhook endpoint."""

from functools import lru_cache

from stripekit.common.core.config import settings
from stripekit.packages.webhooks.handlers import register_default_handlers
from stripekit.packages.webhooks.processor import WebhookProcessor
from stripekit.packages.webhooks.registry import HandlerRegistry


@lru_cache
def get_webhook_processor() -> WebhookProcessor:
    """Processor for the server's own webhook endpoint, built once."""
    registry = register_default_handlers(HandlerRegistry())
    return WebhookProcessor(
        registry,
        webhook_secret=settings.stripe_webhook_secret,
        tolerance=settings.stripe_webhook_tolerance,
    )
