"""
Interface for billing providers.

The narrow set of account/subscription operations the gateway consumes from
the remote ledger. Implementations raise ProviderError for any remote failure.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from stripekit.packages.billing.models.domain import (
    AccountPage,
    BillingAccount,
    CheckoutSessionSummary,
    PaymentIntentSummary,
    Subscription,
    SubscriptionItem,
    SubscriptionStatus,
)


class BillingProviderInterface(ABC):
    """Abstract interface for billing providers."""

    # Accounts

    @abstractmethod
    async def find_account_by_email(self, email: str) -> Optional[BillingAccount]:
        """
        Find the canonical account for an email.

        Returns:
            The first account the provider lists for the email, or None
        """
        pass

    @abstractmethod
    async def get_account(self, account_id: str) -> BillingAccount:
        """Retrieve an account by its provider ID."""
        pass

    @abstractmethod
    async def create_account(
        self,
        email: str,
        name: str,
        payment_method_id: Optional[str] = None,
    ) -> BillingAccount:
        """
        Create an account.

        Args:
            email: Account email
            name: Display name
            payment_method_id: Optional payment method set as invoice default
        """
        pass

    @abstractmethod
    async def attach_payment_method(
        self, account_id: str, payment_method_id: str
    ) -> None:
        """Attach a payment method to an account and make it the default."""
        pass

    @abstractmethod
    async def update_account_metadata(
        self, account_id: str, metadata: dict[str, str]
    ) -> BillingAccount:
        """Merge string metadata into an account."""
        pass

    @abstractmethod
    async def list_accounts(
        self, limit: int, starting_after: Optional[str] = None
    ) -> AccountPage:
        """
        List one page of accounts.

        Args:
            limit: Page size
            starting_after: Cursor (ID of the last account of the previous page)
        """
        pass

    # Subscriptions

    @abstractmethod
    async def list_subscriptions(
        self,
        account_id: str,
        status: Optional[SubscriptionStatus] = None,
        limit: int = 10,
    ) -> list[Subscription]:
        """
        List an account's subscriptions, most recent first.

        Args:
            account_id: Provider account ID
            status: Restrict to one status (all statuses when None)
            limit: Maximum number returned
        """
        pass

    @abstractmethod
    async def create_subscription(
        self, account_id: str, price_ids: list[str]
    ) -> Subscription:
        """
        Create a subscription with one line item per price.

        Must fail rather than leave an incomplete subscription pending.
        """
        pass

    @abstractmethod
    async def cancel_subscription(self, subscription_id: str) -> Subscription:
        """Cancel a subscription immediately."""
        pass

    @abstractmethod
    async def create_checkout_session(
        self,
        account_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionSummary:
        """Create a hosted checkout session for a subscription."""
        pass

    # Usage

    @abstractmethod
    async def report_usage(
        self,
        account_id: str,
        item: SubscriptionItem,
        quantity: int,
        timestamp: datetime,
    ) -> None:
        """
        Record usage against a metered line item.

        Args:
            account_id: Provider account ID
            item: The metered subscription item
            quantity: Units consumed
            timestamp: Moment the usage happened
        """
        pass

    # Payments

    @abstractmethod
    async def create_payment_intent(
        self,
        account_id: str,
        amount_minor: int,
        currency: str,
        metadata: Optional[dict[str, str]] = None,
    ) -> PaymentIntentSummary:
        """Create a payment intent. ``amount_minor`` is in the currency's minor unit."""
        pass

    @abstractmethod
    async def retrieve_payment_intent(
        self, payment_intent_id: str
    ) -> PaymentIntentSummary:
        """Retrieve a payment intent."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the billing backend is available and healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
