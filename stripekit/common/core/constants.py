from enum import Enum


class Environment(str, Enum):
    """Environment profiles."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class ErrorKind(str, Enum):
    """Failure categories reported across the public boundary."""

    VALIDATION = "validation"
    FORMAT = "format"
    NOT_FOUND = "not_found"
    SUBSCRIPTION_INACTIVE = "subscription_inactive"
    SIGNATURE = "signature"
    PROVIDER = "provider"
    HANDLER = "handler"


# Metadata fields written onto the billing account
LICENSE_KEY_METADATA_FIELD = "apiKey"
PLAN_METADATA_FIELD = "plan"
CREATED_AT_METADATA_FIELD = "createdAt"
