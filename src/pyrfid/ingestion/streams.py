"""Hot broadcast channels.

An :class:`EventStream` is an ordered registry of callbacks. Publishing
calls every callback registered at that moment, in registration order.
There is no replay buffer: a subscriber only sees events published
after it subscribed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by :meth:`EventStream.subscribe`."""

    def __init__(self, release: Callable[[Subscription], None]) -> None:
        self._release: Callable[[Subscription], None] | None = release

    @property
    def closed(self) -> bool:
        return self._release is None

    def unsubscribe(self) -> None:
        """Detach from the stream. Safe to call more than once."""
        release = self._release
        self._release = None
        if release is not None:
            release(self)


class EventStream(Generic[T]):
    """Non-replaying multi-consumer broadcast channel."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[tuple[Subscription, Callable[[T], None]]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        subscription = Subscription(self._release)
        self._subscribers.append((subscription, callback))
        return subscription

    def _release(self, subscription: Subscription) -> None:
        self._subscribers = [entry for entry in self._subscribers if entry[0] is not subscription]

    def publish(self, event: T) -> None:
        """Deliver *event* to every current subscriber.

        A failing subscriber is logged and skipped; the others still
        receive the event.
        """
        # Snapshot so (un)subscribing from a callback does not affect this delivery.
        for subscription, callback in list(self._subscribers):
            if subscription.closed:
                continue
            try:
                callback(event)
            except Exception:
                _logger.debug("Subscriber of stream %s failed", self.name, exc_info=True)


class SubscriptionGroup:
    """Collects subscriptions so a consumer can tear them down together."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return sum(1 for sub in self._subscriptions if not sub.closed)

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def close(self) -> None:
        subscriptions = self._subscriptions
        self._subscriptions = []
        for subscription in subscriptions:
            subscription.unsubscribe()
