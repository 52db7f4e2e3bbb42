"""Provisioning API routes."""

from stripekit.packages.provisioning.routes import subscriptions

__all__ = ["subscriptions"]
