"""
Registry of webhook handlers, one per canonical event tag.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from stripekit.packages.webhooks.models.domain import CanonicalEvent, WebhookEvent
from stripekit.packages.webhooks.transformer import SOURCE_TO_CANONICAL

# Handlers may be plain functions or coroutines
WebhookHandler = Callable[
    [CanonicalEvent, WebhookEvent], Union[Awaitable[Any], Any]
]


def _key(event_type: Union[str, Enum]) -> str:
    return event_type.value if isinstance(event_type, Enum) else str(event_type)


def _registration_key(event_type: Union[str, Enum]) -> str:
    # Stripe types with a canonical mapping are only ever dispatched by their tag
    key = _key(event_type)
    canonical = SOURCE_TO_CANONICAL.get(key)
    return canonical.value if canonical is not None else key


class HandlerRegistry:
    """
    Maps a canonical event tag (or a raw Stripe type for pass-through events)
    to at most one handler.

    Owned by a gateway instance. Populated during setup; dispatch reads
    whatever is registered at invocation time.
    """

    def __init__(self):
        self._handlers: dict[str, WebhookHandler] = {}

    def register(self, event_type: Union[str, Enum], handler: WebhookHandler) -> None:
        """
        Register a handler. Replaces any previous handler for the tag.

        A raw Stripe type that has a canonical mapping (e.g.
        ``payment_intent.succeeded``) registers under its canonical tag.
        """
        self._handlers[_registration_key(event_type)] = handler

    def unregister(self, event_type: Union[str, Enum]) -> None:
        self._handlers.pop(_registration_key(event_type), None)

    def get(self, event_type: Union[str, Enum]) -> Optional[WebhookHandler]:
        return self._handlers.get(_key(event_type))

    def __contains__(self, event_type: Union[str, Enum]) -> bool:
        return _key(event_type) in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
