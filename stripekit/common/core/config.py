from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from stripekit.common.core.constants import Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "StripeKit API"
    api_version: str = "1.0.0"
    debug: bool = False
    port: int = 3000

    # Billing - Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_webhook_tolerance: int = 300  # Seconds a signed timestamp stays valid
    stripe_timeout: float = 30.0

    # Stripe price IDs for each plan (flat recurring component)
    stripe_price_id_starter: str = ""
    stripe_price_id_pro: str = ""
    stripe_price_id_enterprise: str = ""
    stripe_price_id_pay_as_you_go: str = ""

    # Optional metered price IDs for hybrid billing (flat + usage)
    stripe_metered_price_id_starter: Optional[str] = None
    stripe_metered_price_id_pro: Optional[str] = None
    stripe_metered_price_id_enterprise: Optional[str] = None
    stripe_metered_price_id_pay_as_you_go: Optional[str] = None

    # Licensing
    license_key_prefix: str = "sk_prod_"
    account_scan_page_size: int = 100  # Stripe caps list pages at 100
    account_scan_max_pages: Optional[int] = None  # None scans every page
    license_validation_timeout: float = 10.0

    # Rate limiting for key-probing endpoints
    validate_key_rate_limit: str = "120/minute"
    rate_limit_storage_uri: str = "memory://"

    # OpenTelemetry
    otel_service_name: str = "stripekit"
    otel_exporter_otlp_endpoint: Optional[str] = None
    otel_exporter_otlp_headers: dict[str, str] = {}

    @property
    def docs_enabled(self) -> bool:
        """Only expose OpenAPI docs in local development."""
        return self.environment == Environment.LOCAL


settings = Settings()
