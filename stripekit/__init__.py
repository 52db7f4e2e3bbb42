"""
StripeKit - licensing and billing gateway over Stripe.

Verifies and dispatches Stripe webhooks, validates license keys against live
subscription state, and meters per-call usage.
"""

from stripekit.kit import StripeKit

__all__ = ["StripeKit"]
