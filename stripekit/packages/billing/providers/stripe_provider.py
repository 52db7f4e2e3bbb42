"""
Stripe implementation of the billing provider.
"""

from contextlib import contextmanager
import functools
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping, Optional
import stripe

from stripekit.common.core.exceptions import ProviderError
from stripekit.common.core.telemetry import trace_span, get_logger
from stripekit.packages.billing.models.domain import (
    AccountPage,
    BillingAccount,
    CheckoutSessionSummary,
    PaymentIntentSummary,
    Price,
    PriceUsageType,
    Subscription,
    SubscriptionItem,
    SubscriptionStatus,
)
from stripekit.packages.billing.providers.interface import BillingProviderInterface

logger = get_logger(__name__)


@contextmanager
def _provider_call(operation: str, **context: Any) -> Iterator[None]:
    """Translate Stripe SDK failures, timeouts included, into ProviderError."""
    try:
        yield
    except stripe.StripeError as e:
        message = e.user_message or str(e) or "Stripe request failed"
        logger.error(
            f"Stripe {operation} failed: {message}",
            extra={"operation": operation, "error": str(e), **context},
        )
        raise ProviderError(message) from e


def _stripe_mapper(func):
    """Report Stripe objects that do not fit the domain models as ProviderError."""

    @functools.wraps(func)
    def wrapper(obj: Mapping[str, Any]):
        try:
            return func(obj)
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            logger.error(
                f"Unexpected Stripe object in {func.__name__}: {e}",
                extra={"object_id": obj.get("id") if hasattr(obj, "get") else None},
            )
            raise ProviderError(f"Unexpected response from Stripe: {e}") from e

    return wrapper


def _from_epoch(value: Optional[int]) -> Optional[datetime]:
    return datetime.fromtimestamp(value, tz=timezone.utc) if value else None


@_stripe_mapper
def _to_account(obj: Mapping[str, Any]) -> BillingAccount:
    return BillingAccount(
        id=obj["id"],
        email=obj.get("email"),
        name=obj.get("name"),
        metadata={k: str(v) for k, v in (obj.get("metadata") or {}).items()},
        created=_from_epoch(obj.get("created")),
    )


def _to_price(obj: Mapping[str, Any]) -> Price:
    recurring = obj.get("recurring") or {}
    return Price(
        id=obj["id"],
        nickname=obj.get("nickname"),
        usage_type=PriceUsageType(recurring.get("usage_type") or "licensed"),
        meter_id=recurring.get("meter"),
    )


@_stripe_mapper
def _to_subscription(obj: Mapping[str, Any]) -> Subscription:
    raw_items = list((obj.get("items") or {}).get("data") or [])

    # Newer API versions carry the billing period on the items
    period_end = obj.get("current_period_end") or next(
        (i.get("current_period_end") for i in raw_items if i.get("current_period_end")),
        None,
    )

    return Subscription(
        id=obj["id"],
        customer_id=obj["customer"],
        status=SubscriptionStatus(obj["status"]),
        current_period_end=_from_epoch(period_end),
        items=[
            SubscriptionItem(id=item["id"], price=_to_price(item["price"]))
            for item in raw_items
        ],
    )


@_stripe_mapper
def _to_payment_intent(obj: Mapping[str, Any]) -> PaymentIntentSummary:
    return PaymentIntentSummary(
        id=obj["id"],
        amount=obj["amount"] / 100,
        currency=obj["currency"],
        status=obj["status"],
        client_secret=obj.get("client_secret"),
    )


class StripeBillingProvider(BillingProviderInterface):
    """Stripe-based billing implementation over the async SDK."""

    def __init__(self, secret_key: str, timeout: float = 30.0):
        """Initialize a Stripe client bound to one secret key."""
        # No SDK-level retries: retry policy belongs to the caller
        self.client = stripe.StripeClient(
            secret_key,
            http_client=stripe.HTTPXClient(timeout=timeout),
            max_network_retries=0,
        )

    @trace_span
    async def find_account_by_email(self, email: str) -> Optional[BillingAccount]:
        with _provider_call("customers.list", email=email):
            result = await self.client.v1.customers.list_async(
                params={"email": email, "limit": 1}
            )
        if not result.data:
            return None
        return _to_account(result.data[0])

    @trace_span
    async def get_account(self, account_id: str) -> BillingAccount:
        with _provider_call("customers.retrieve", customer_id=account_id):
            customer = await self.client.v1.customers.retrieve_async(account_id)
        return _to_account(customer)

    @trace_span
    async def create_account(
        self,
        email: str,
        name: str,
        payment_method_id: Optional[str] = None,
    ) -> BillingAccount:
        params: dict[str, Any] = {"email": email, "name": name}
        if payment_method_id:
            params["payment_method"] = payment_method_id
            params["invoice_settings"] = {"default_payment_method": payment_method_id}

        with _provider_call("customers.create", email=email):
            customer = await self.client.v1.customers.create_async(params=params)

        logger.info("Created Stripe customer", extra={"customer_id": customer.id})
        return _to_account(customer)

    @trace_span
    async def attach_payment_method(
        self, account_id: str, payment_method_id: str
    ) -> None:
        with _provider_call("payment_methods.attach", customer_id=account_id):
            await self.client.v1.payment_methods.attach_async(
                payment_method_id, params={"customer": account_id}
            )
            await self.client.v1.customers.update_async(
                account_id,
                params={
                    "invoice_settings": {"default_payment_method": payment_method_id}
                },
            )

    @trace_span
    async def update_account_metadata(
        self, account_id: str, metadata: dict[str, str]
    ) -> BillingAccount:
        with _provider_call("customers.update", customer_id=account_id):
            customer = await self.client.v1.customers.update_async(
                account_id, params={"metadata": metadata}
            )
        return _to_account(customer)

    @trace_span
    async def list_accounts(
        self, limit: int, starting_after: Optional[str] = None
    ) -> AccountPage:
        params: dict[str, Any] = {"limit": limit}
        if starting_after:
            params["starting_after"] = starting_after

        with _provider_call("customers.list", limit=limit):
            result = await self.client.v1.customers.list_async(params=params)

        return AccountPage(
            accounts=[_to_account(c) for c in result.data],
            has_more=bool(result.has_more),
        )

    @trace_span
    async def list_subscriptions(
        self,
        account_id: str,
        status: Optional[SubscriptionStatus] = None,
        limit: int = 10,
    ) -> list[Subscription]:
        params = {
            "customer": account_id,
            "status": status.value if status else "all",
            "limit": limit,
        }
        with _provider_call("subscriptions.list", customer_id=account_id):
            result = await self.client.v1.subscriptions.list_async(params=params)
        return [_to_subscription(s) for s in result.data]

    @trace_span
    async def create_subscription(
        self, account_id: str, price_ids: list[str]
    ) -> Subscription:
        with _provider_call("subscriptions.create", customer_id=account_id):
            subscription = await self.client.v1.subscriptions.create_async(
                params={
                    "customer": account_id,
                    "items": [{"price": price_id} for price_id in price_ids],
                    "payment_behavior": "error_if_incomplete",
                    "payment_settings": {
                        "save_default_payment_method": "on_subscription"
                    },
                    "expand": ["latest_invoice.payment_intent"],
                }
            )

        logger.info(
            "Created Stripe subscription",
            extra={
                "customer_id": account_id,
                "subscription_id": subscription.id,
                "status": subscription.status,
            },
        )
        return _to_subscription(subscription)

    @trace_span
    async def cancel_subscription(self, subscription_id: str) -> Subscription:
        with _provider_call("subscriptions.cancel", subscription_id=subscription_id):
            subscription = await self.client.v1.subscriptions.cancel_async(
                subscription_id
            )

        logger.info(
            "Cancelled Stripe subscription",
            extra={"subscription_id": subscription_id},
        )
        return _to_subscription(subscription)

    @trace_span
    async def create_checkout_session(
        self,
        account_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionSummary:
        with _provider_call("checkout.sessions.create", customer_id=account_id):
            session = await self.client.v1.checkout.sessions.create_async(
                params={
                    "customer": account_id,
                    "payment_method_types": ["card"],
                    "line_items": [{"price": price_id, "quantity": 1}],
                    "mode": "subscription",
                    "success_url": success_url,
                    "cancel_url": cancel_url,
                }
            )
        return CheckoutSessionSummary(id=session.id, url=session.get("url"))

    @trace_span
    async def report_usage(
        self,
        account_id: str,
        item: SubscriptionItem,
        quantity: int,
        timestamp: datetime,
    ) -> None:
        if not item.price.meter_id:
            raise ProviderError(
                f"Metered price {item.price.id} is not attached to a billing meter"
            )

        with _provider_call("billing.meter_events.create", customer_id=account_id):
            meter = await self.client.v1.billing.meters.retrieve_async(
                item.price.meter_id
            )
            customer_key = (meter.get("customer_mapping") or {}).get(
                "event_payload_key"
            ) or "stripe_customer_id"
            value_key = (meter.get("value_settings") or {}).get(
                "event_payload_key"
            ) or "value"

            await self.client.v1.billing.meter_events.create_async(
                params={
                    "event_name": meter.event_name,
                    "payload": {customer_key: account_id, value_key: str(quantity)},
                    "timestamp": int(timestamp.timestamp()),
                }
            )

        logger.info(
            "Reported metered usage",
            extra={
                "customer_id": account_id,
                "subscription_item_id": item.id,
                "meter_id": item.price.meter_id,
                "quantity": quantity,
            },
        )

    @trace_span
    async def create_payment_intent(
        self,
        account_id: str,
        amount_minor: int,
        currency: str,
        metadata: Optional[dict[str, str]] = None,
    ) -> PaymentIntentSummary:
        with _provider_call("payment_intents.create", customer_id=account_id):
            intent = await self.client.v1.payment_intents.create_async(
                params={
                    "customer": account_id,
                    "amount": amount_minor,
                    "currency": currency,
                    "metadata": metadata or {},
                }
            )
        return _to_payment_intent(intent)

    @trace_span
    async def retrieve_payment_intent(
        self, payment_intent_id: str
    ) -> PaymentIntentSummary:
        with _provider_call(
            "payment_intents.retrieve", payment_intent_id=payment_intent_id
        ):
            intent = await self.client.v1.payment_intents.retrieve_async(
                payment_intent_id
            )
        return _to_payment_intent(intent)

    @trace_span
    async def health_check(self) -> bool:
        """Check Stripe health by reading the account balance."""
        try:
            await self.client.v1.balance.retrieve_async()
            return True
        except stripe.StripeError as e:
            logger.error(f"Billing provider health check failed: {e}")
            return False
