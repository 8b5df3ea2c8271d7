# ABOUTME: Exceptions package exports
# ABOUTME: Exports the exception hierarchy rooted at OnionException

from onion.exceptions.base import (
    OnionException,
    HttpError,
    ConfigurationException,
    TransportError,
    HttpParseError,
    status_message,
)

from onion.exceptions.middleware import (
    MiddlewareError,
    NextCalledMultipleTimesError,
    MiddlewareTypeError,
    MiddlewareExecutionError,
)

__all__ = [
    "OnionException",
    "HttpError",
    "ConfigurationException",
    "TransportError",
    "HttpParseError",
    "status_message",
    # Middleware exceptions
    "MiddlewareError",
    "NextCalledMultipleTimesError",
    "MiddlewareTypeError",
    "MiddlewareExecutionError",
]
