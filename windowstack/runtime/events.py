"""Lightweight event bus for window lifecycle fan-out."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from windowstack.api.events import Subscription

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]

logger = logging.getLogger(__name__)


class RuntimeEventBus:
    """Simple in-process pub/sub; handlers run in subscription order."""

    def __init__(self, *, trace: bool = False) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, tuple[type[object], EventHandler]] = {}
        self._trace = trace

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for an event type."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = (event_type, handler)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._subscriptions.pop(subscription.id, None)

    def clear(self) -> None:
        """Drop every subscription."""
        self._subscriptions.clear()

    def publish(self, event: object) -> int:
        """Publish one event and return number of invoked handlers."""
        if self._trace:
            logger.debug("event_publish type=%s", type(event).__name__)
        invoked = 0
        for subscribed_type, handler in tuple(self._subscriptions.values()):
            if isinstance(event, subscribed_type):
                handler(event)
                invoked += 1
        return invoked


EventBus = RuntimeEventBus
