"""Global rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from stripekit.common.core.config import settings

# No default limits: only key-probing endpoints carry an explicit limit.
# The default memory:// storage counts per process; point the storage URI at a
# shared backend when running several instances.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri=settings.rate_limit_storage_uri,
)
