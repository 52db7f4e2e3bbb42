"""
Key directory: resolves a license key to the account whose metadata holds it.
"""

import secrets
from typing import Optional

from stripekit.common.core.exceptions import NotFoundError
from stripekit.common.core.telemetry import get_logger, trace_span
from stripekit.packages.billing.models.domain import BillingAccount
from stripekit.packages.billing.providers.interface import BillingProviderInterface

logger = get_logger(__name__)


class KeyDirectory:
    """
    Linear scan over the provider's accounts.

    Keys live in free-form account metadata, which the provider cannot index,
    so lookups walk the account list page by page (bounded page size) until a
    match or the end of the list.
    """

    def __init__(
        self,
        provider: BillingProviderInterface,
        page_size: int = 100,
        max_pages: Optional[int] = None,
    ):
        self.provider = provider
        self.page_size = page_size
        self.max_pages = max_pages

    @trace_span
    async def find_by_key(self, api_key: str) -> BillingAccount:
        """
        Find the account owning a key.

        Raises:
            NotFoundError: No account carries the key
            ProviderError: Listing accounts failed
        """
        starting_after = None
        pages = 0

        while True:
            page = await self.provider.list_accounts(
                limit=self.page_size, starting_after=starting_after
            )
            pages += 1

            for account in page.accounts:
                stored = account.license_key
                if stored and secrets.compare_digest(
                    stored.encode(), api_key.encode()
                ):
                    return account

            if not page.has_more or not page.accounts:
                break
            if self.max_pages is not None and pages >= self.max_pages:
                logger.warning(
                    "Key lookup stopped at the page limit",
                    extra={"pages": pages, "page_size": self.page_size},
                )
                break
            starting_after = page.last_id

        logger.info("License key not found", extra={"pages_scanned": pages})
        raise NotFoundError("Invalid API key")
