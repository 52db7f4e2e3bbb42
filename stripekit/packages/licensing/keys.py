"""
License key generation and format checks.
"""

import secrets
from typing import Optional

from stripekit.common.core.config import settings
from stripekit.common.core.exceptions import FormatError

# 24 random bytes -> 32 url-safe characters, 192 bits of entropy
KEY_ENTROPY_BYTES = 24


def generate_license_key(prefix: Optional[str] = None) -> str:
    """Generate a fresh production license key."""
    return (prefix or settings.license_key_prefix) + secrets.token_urlsafe(
        KEY_ENTROPY_BYTES
    )


def check_key_format(api_key: Optional[str], prefix: Optional[str] = None) -> str:
    """
    Check a key is non-empty and carries the production prefix.

    Runs before any remote lookup, so a string lacking the prefix fails even
    if some account happens to store it verbatim.

    Raises:
        FormatError: When the key is empty or not a production key
    """
    prefix = prefix or settings.license_key_prefix
    if not api_key or not api_key.startswith(prefix) or len(api_key) == len(prefix):
        raise FormatError("Invalid API key")
    return api_key
