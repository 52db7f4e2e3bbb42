"""
Billing package - the gateway's view of the remote billing provider.

This package integrates with:
- Stripe: accounts, subscriptions, payment intents and metered usage

The gateway holds no local billing state; everything lives in Stripe.
"""
