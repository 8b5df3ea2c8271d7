# ABOUTME: Core exception classes for the onion request-handling core
# ABOUTME: Provides structured error handling with context, error codes and HTTP status

from http import HTTPStatus
from typing import Dict, Any


class OnionException(Exception):
    """Base exception class for the onion core.

    Provides structured error handling with optional error codes and contextual
    details. All custom exceptions in the package inherit from this class
    to ensure consistent error handling patterns.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary containing contextual information
    """

    def __init__(self, message: str, code: str | None = None, details: Dict[str, Any] | None = None):
        """Initialize OnionException with message, optional code and details.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary containing contextual information
        """
        self.message = message
        self.code = code
        self.details = details.copy() if details else {}
        super().__init__(self.message)


class HttpError(OnionException):
    """Exception carrying an HTTP status code.

    Raised by middleware (usually through ``Context.throw``) to abort the
    pipeline with a specific status. The default error handler never reports
    errors whose status is 404.

    Attributes:
        status: HTTP status code associated with the error
        expose: Whether the message is safe to send to the client. Defaults to
            True for client errors (4xx) and False otherwise.
    """

    def __init__(
        self,
        status: int = 500,
        message: str | None = None,
        code: str | None = None,
        details: Dict[str, Any] | None = None,
        expose: bool | None = None,
    ):
        if message is None:
            message = status_message(status)
        super().__init__(message, code=code, details=details)
        self.status = status
        self.expose = expose if expose is not None else 400 <= status < 500


class ConfigurationException(OnionException):
    """Exception raised for configuration errors.

    Used when configuration values are invalid, e.g. a negative JSON indent
    width or an unrecognized event name on the application.
    """

    pass


class TransportError(OnionException):
    """Base exception for transport failures (socket and wire level)."""

    pass


class HttpParseError(TransportError):
    """Exception raised when an inbound HTTP request cannot be parsed.

    Used for malformed request lines, oversized headers or truncated bodies.
    """

    def __init__(self, message: str, status: int = 400, details: Dict[str, Any] | None = None):
        super().__init__(message, code="HTTP_PARSE", details=details)
        self.status = status


def status_message(status: int) -> str:
    """Return the standard reason phrase for ``status``, or the code itself when unknown."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)
