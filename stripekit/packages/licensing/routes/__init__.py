"""Licensing API routes."""

from stripekit.packages.licensing.routes import licensing

__all__ = ["licensing"]
