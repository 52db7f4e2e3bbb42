"""
Licensing package - validates opaque license keys and meters billable calls.

Keys are stored only in Stripe customer metadata; there is no local key table.
"""
