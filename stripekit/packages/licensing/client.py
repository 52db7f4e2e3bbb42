"""
Client for checking a license key against a remote validation endpoint.

Used by embedding applications (StripeKit) that hold a license key but not
the gateway's Stripe credentials.
"""

from typing import Optional
import httpx
from pydantic import ValidationError as PydanticValidationError

from stripekit.common.core.config import settings
from stripekit.common.core.exceptions import (
    AppException,
    NotFoundError,
    ProviderError,
    SubscriptionInactiveError,
    ValidationError,
)
from stripekit.common.core.telemetry import get_logger, trace_span
from stripekit.packages.licensing.keys import check_key_format
from stripekit.packages.licensing.models.domain import LicenseValidation

logger = get_logger(__name__)

# Gateway status codes mapped back onto the error taxonomy
_STATUS_ERRORS: dict[int, type[AppException]] = {
    400: ValidationError,
    401: NotFoundError,
    402: SubscriptionInactiveError,
}


class LicenseClient:
    """Validates a license key over HTTP."""

    def __init__(
        self,
        validation_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.validation_url = validation_url
        self.timeout = timeout or settings.license_validation_timeout
        self._transport = transport

    @trace_span
    async def validate(self, api_key: str) -> LicenseValidation:
        """
        Validate a key remotely. The format is checked locally first.

        Raises:
            FormatError: Not a production key (no request is made)
            ValidationError / NotFoundError / SubscriptionInactiveError:
                The gateway refused the key
            ProviderError: Network failure, timeout or unexpected response
        """
        check_key_format(api_key)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.validation_url, json={"apiKey": api_key}
                )
        except httpx.HTTPError as e:
            logger.error(
                f"License validation request failed: {e}",
                extra={"url": self.validation_url, "error": str(e)},
            )
            raise ProviderError(f"License validation request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error = body.get("error")

        if response.status_code in _STATUS_ERRORS:
            raise _STATUS_ERRORS[response.status_code](error)
        if response.status_code != 200 or not body.get("valid"):
            raise ProviderError(
                error or f"License validation failed with HTTP {response.status_code}"
            )

        try:
            return LicenseValidation.model_validate(body)
        except PydanticValidationError as e:
            raise ProviderError("Malformed license validation response") from e
