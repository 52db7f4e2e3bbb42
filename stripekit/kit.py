"""
StripeKit: the embeddable library surface.

Wraps the billing provider behind helpers that never raise, each returning an
``Ok`` or ``Failure`` result, and exposes the webhook pipeline with one
registration method per canonical event type.
"""

from typing import Any, Optional, Union
from enum import Enum

from stripekit.common.core.exceptions import (
    AppException,
    NotFoundError,
    ValidationError,
)
from stripekit.common.core.results import Failure, Ok, Result
from stripekit.common.core.telemetry import get_logger
from stripekit.packages.billing.models.domain import BillingAccount
from stripekit.packages.billing.providers.interface import BillingProviderInterface
from stripekit.packages.billing.providers.stripe_provider import StripeBillingProvider
from stripekit.packages.licensing.client import LicenseClient
from stripekit.packages.licensing.keys import check_key_format
from stripekit.packages.licensing.models.domain import LicenseValidation
from stripekit.packages.webhooks.models.domain import CanonicalEventType, WebhookEvent
from stripekit.packages.webhooks.processor import WebhookProcessor, WebhookResult
from stripekit.packages.webhooks.registry import HandlerRegistry, WebhookHandler
from stripekit.packages.webhooks.signature import DEFAULT_TOLERANCE, verify_signature

logger = get_logger(__name__)


class StripeKit:
    """
    Stripe helpers plus webhook dispatch for embedding applications.

    Each instance owns its own handler registry, so several kits in one
    process do not see each other's handlers.
    """

    def __init__(
        self,
        secret_key: str,
        license_key: Optional[str] = None,
        validation_url: Optional[str] = None,
        provider: Optional[BillingProviderInterface] = None,
        webhook_tolerance: int = DEFAULT_TOLERANCE,
    ):
        """
        Args:
            secret_key: Stripe secret key (sk_test_... or sk_live_...)
            license_key: Optional StripeKit license key
            validation_url: Endpoint the license key is validated against
            provider: Billing provider override (defaults to Stripe)
            webhook_tolerance: Maximum age in seconds of signed webhooks
        """
        if not secret_key:
            raise ValidationError(
                "Stripe Secret Key is required to initialize StripeKit."
            )
        self.provider = provider or StripeBillingProvider(secret_key)
        self.license_key = license_key
        self.validation_url = validation_url
        self.registry = HandlerRegistry()
        self.webhook_tolerance = webhook_tolerance
        self._processor = WebhookProcessor(self.registry, tolerance=webhook_tolerance)

    async def _run(self, operation: str, call) -> Result:
        try:
            return Ok(value=await call)
        except AppException as e:
            logger.warning(
                f"StripeKit {operation} failed: {e.message}",
                extra={"operation": operation, "kind": e.kind.value},
            )
            return Failure.from_exception(e)

    # === PAYMENTS ===

    async def create_payment(
        self,
        customer_id: str,
        amount: float,
        currency: str = "usd",
        metadata: Optional[dict[str, str]] = None,
    ) -> Result:
        """
        Create a payment intent (charge a card).

        Args:
            customer_id: Stripe customer ID
            amount: Amount in decimal units (e.g. 10.00)
            currency: Currency code
            metadata: Optional metadata
        """
        return await self._run(
            "create_payment",
            self.provider.create_payment_intent(
                customer_id, round(amount * 100), currency, metadata
            ),
        )

    async def get_payment(self, payment_intent_id: str) -> Result:
        """Retrieve a payment intent; the amount comes back in decimal units."""
        return await self._run(
            "get_payment", self.provider.retrieve_payment_intent(payment_intent_id)
        )

    # === CUSTOMERS ===

    async def create_customer(self, email: str, name: str) -> Result:
        return await self._run(
            "create_customer", self.provider.create_account(email, name)
        )

    async def get_customer_by_email(self, email: str) -> Result:
        return await self._run("get_customer_by_email", self._customer_by_email(email))

    async def _customer_by_email(self, email: str) -> BillingAccount:
        account = await self.provider.find_account_by_email(email)
        if account is None:
            raise NotFoundError("Customer not found")
        return account

    # === SUBSCRIPTIONS ===

    async def create_subscription_checkout(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
    ) -> Result:
        """Create a hosted checkout session for a subscription."""
        return await self._run(
            "create_subscription_checkout",
            self.provider.create_checkout_session(
                customer_id, price_id, success_url, cancel_url
            ),
        )

    async def cancel_subscription(self, subscription_id: str) -> Result:
        return await self._run(
            "cancel_subscription", self.provider.cancel_subscription(subscription_id)
        )

    # === WEBHOOKS ===

    def on(self, event_type: Union[str, Enum], handler: WebhookHandler) -> None:
        """
        Register a handler for a canonical tag, or for a raw Stripe type.
        Raw types with a canonical mapping register under their canonical
        tag. Replaces any previous handler.
        """
        self.registry.register(event_type, handler)

    def on_payment_succeeded(self, handler: WebhookHandler) -> None:
        self.on(CanonicalEventType.PAYMENT_SUCCEEDED, handler)

    def on_payment_failed(self, handler: WebhookHandler) -> None:
        self.on(CanonicalEventType.PAYMENT_FAILED, handler)

    def on_subscription_created(self, handler: WebhookHandler) -> None:
        self.on(CanonicalEventType.SUBSCRIPTION_CREATED, handler)

    def on_subscription_ended(self, handler: WebhookHandler) -> None:
        self.on(CanonicalEventType.SUBSCRIPTION_ENDED, handler)

    def on_charge_refunded(self, handler: WebhookHandler) -> None:
        self.on(CanonicalEventType.CHARGE_REFUNDED, handler)

    async def handle_webhook(
        self, raw_body: Any, signature: Optional[str], secret: str
    ) -> WebhookResult:
        """
        Verify, canonicalize and dispatch a webhook.

        Pass the raw request body: a parsed and re-serialized payload fails
        verification.
        """
        return await self._processor.process(raw_body, signature, secret)

    def construct_event(
        self, payload: Any, signature: Optional[str], secret: str
    ) -> WebhookEvent:
        """
        Verify a webhook and return the typed event.

        Raises:
            SignatureError: Verification failed
        """
        return verify_signature(payload, signature, secret, self.webhook_tolerance)

    # === LICENSING ===

    async def validate_license(self) -> Result:
        """
        Check the configured license key against the validation endpoint.

        The key format is checked locally before any request. Fails when no
        key or no validation URL is configured.
        """
        return await self._run("validate_license", self._validate_license())

    async def _validate_license(self) -> LicenseValidation:
        if not self.license_key:
            raise ValidationError("No license key configured")
        check_key_format(self.license_key)
        if not self.validation_url:
            raise ValidationError("No license validation endpoint configured")
        return await LicenseClient(self.validation_url).validate(self.license_key)
