"""
Webhooks package - verifies Stripe webhooks and dispatches canonical events.

Pipeline: signature -> transformer -> registry/dispatcher.
"""
