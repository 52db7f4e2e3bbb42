"""Webhook API routes."""

from stripekit.packages.webhooks.routes import webhooks

__all__ = ["webhooks"]
