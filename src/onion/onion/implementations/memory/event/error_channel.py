# ABOUTME: In-memory implementation of AbstractErrorChannel
# ABOUTME: Synchronous in-process publish/subscribe for application error events

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from loguru import logger

from onion.interfaces.event.error_channel import AbstractErrorChannel, ErrorHandler
from onion.models.event.error_event import ErrorEvent


@dataclass
class Subscription:
    """Internal subscription data structure."""

    id: str
    handler: ErrorHandler


class InMemoryErrorChannel(AbstractErrorChannel):
    """
    In-memory implementation of AbstractErrorChannel.

    Subscribers are invoked synchronously, in subscription order, on the
    publishing thread. An exception raised by a subscriber propagates to the
    publisher and the remaining subscribers do not run.
    """

    def __init__(self, default_handler: Optional[ErrorHandler] = None):
        """
        Initialize the channel.

        Args:
            default_handler: Handler run after every subscriber unless
                propagation was stopped.
        """
        self._subscriptions: List[Subscription] = []
        self._subscription_by_id: Dict[str, Subscription] = {}
        self._subscription_lock = threading.Lock()
        self._default_handler = default_handler
        self._published_count = 0

    @property
    def default_handler(self) -> Optional[ErrorHandler]:
        return self._default_handler

    @default_handler.setter
    def default_handler(self, handler: Optional[ErrorHandler]) -> None:
        if handler is not None and not callable(handler):
            raise TypeError("Default error handler must be callable")
        self._default_handler = handler

    def subscribe(self, handler: ErrorHandler) -> str:
        if not callable(handler):
            raise TypeError("Error handler must be callable")

        subscription = Subscription(id=str(uuid.uuid4()), handler=handler)
        with self._subscription_lock:
            self._subscriptions.append(subscription)
            self._subscription_by_id[subscription.id] = subscription

        logger.debug(f"Subscribed error handler {getattr(handler, '__name__', handler)!s} ({subscription.id})")
        return subscription.id

    def unsubscribe(self, subscription_id: str) -> bool:
        with self._subscription_lock:
            subscription = self._subscription_by_id.pop(subscription_id, None)
            if subscription is None:
                return False
            self._subscriptions.remove(subscription)

        logger.debug(f"Unsubscribed error handler {subscription_id}")
        return True

    def publish(self, event: ErrorEvent) -> None:
        if not isinstance(event, ErrorEvent):
            raise TypeError("Event must be an instance of ErrorEvent")

        # Snapshot so handlers may (un)subscribe while being notified
        with self._subscription_lock:
            subscriptions = list(self._subscriptions)
            self._published_count += 1

        for subscription in subscriptions:
            subscription.handler(event)
            if event.propagation_stopped:
                logger.debug(f"Propagation of error event {event.id} stopped by {subscription.id}")
                return

        if self._default_handler is not None:
            self._default_handler(event)

    def get_subscription_count(self) -> int:
        with self._subscription_lock:
            return len(self._subscriptions)

    def get_statistics(self) -> dict:
        """
        Get channel statistics.

        Returns:
            dict: Subscription count, published event count and default handler presence.
        """
        with self._subscription_lock:
            return {
                "subscriptions": len(self._subscriptions),
                "published": self._published_count,
                "has_default_handler": self._default_handler is not None,
            }
