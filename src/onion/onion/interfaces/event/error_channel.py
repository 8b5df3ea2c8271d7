# ABOUTME: Abstract error-notification channel interface
# ABOUTME: Publish/subscribe contract used by the application to report unhandled errors

from abc import ABC, abstractmethod
from typing import Callable

from onion.models.event.error_event import ErrorEvent


ErrorHandler = Callable[[ErrorEvent], None]  # Type alias for a synchronous error subscriber.


class AbstractErrorChannel(ABC):
    """
    Abstract interface for a process-wide error-notification channel.

    The application owns one channel and publishes every error that reaches
    a request's error handler. Publishing is synchronous: each subscriber runs
    in subscription order before `publish` returns. A channel may carry one
    default handler that runs after all subscribers unless one of them
    stopped propagation.
    """

    @abstractmethod
    def subscribe(self, handler: ErrorHandler) -> str:
        """
        Subscribes a handler to error events.

        Args:
            handler: Callable receiving each published `ErrorEvent`.

        Returns:
            str: A unique identifier for the subscription.

        Raises:
            TypeError: If the handler is not callable.
        """
        pass

    @abstractmethod
    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Removes a subscription.

        Args:
            subscription_id: Identifier returned by `subscribe`.

        Returns:
            bool: `True` if the subscription existed and was removed, `False` otherwise.
        """
        pass

    @abstractmethod
    def publish(self, event: ErrorEvent) -> None:
        """
        Broadcasts an error event to every subscriber, then to the default handler.

        Args:
            event: The event to broadcast.
        """
        pass

    @abstractmethod
    def get_subscription_count(self) -> int:
        """
        Get the number of subscribers, not counting the default handler.

        Returns:
            int: Number of active subscriptions.
        """
        pass
