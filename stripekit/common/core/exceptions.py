from typing import Optional

from stripekit.common.core.constants import ErrorKind


class AppException(Exception):
    """Base application exception."""

    kind: ErrorKind = ErrorKind.VALIDATION
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppException):
    """Missing or malformed caller input."""

    kind = ErrorKind.VALIDATION
    status_code = 400
    default_message = "Missing required fields"


class FormatError(AppException):
    """License key fails the prefix/shape check."""

    kind = ErrorKind.FORMAT
    status_code = 401
    default_message = "Invalid API key"


class NotFoundError(AppException):
    """Key or account not found."""

    kind = ErrorKind.NOT_FOUND
    status_code = 401
    default_message = "Invalid API key"


class SubscriptionInactiveError(AppException):
    """Account has no subscription entitled to service."""

    kind = ErrorKind.SUBSCRIPTION_INACTIVE
    status_code = 402
    default_message = "Subscription expired or not found"


class SignatureError(AppException):
    """Webhook payload failed authentication."""

    kind = ErrorKind.SIGNATURE
    status_code = 400
    default_message = "Webhook signature verification failed"


class ProviderError(AppException):
    """Any failure from the upstream billing provider, including timeouts."""

    kind = ErrorKind.PROVIDER
    status_code = 500
    default_message = "Billing provider request failed"
