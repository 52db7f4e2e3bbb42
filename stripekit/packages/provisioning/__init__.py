"""
Provisioning package - signup flow creating account, key and subscription.
"""
