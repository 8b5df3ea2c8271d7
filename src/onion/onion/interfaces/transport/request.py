# ABOUTME: Abstract inbound request interface for the transport boundary
# ABOUTME: Exposes method, target and headers of a request produced by a transport

from abc import ABC, abstractmethod
from typing import Dict


class AbstractRequest(ABC):
    """
    Read-only view of an inbound HTTP request.

    Transports parse the wire format and hand an instance of this class to the
    application. The core only reads the method, target and headers; the body
    is left for middleware to consume through `read()`.
    """

    @property
    @abstractmethod
    def method(self) -> str:
        """Upper-cased HTTP method, e.g. "GET"."""
        pass

    @property
    @abstractmethod
    def url(self) -> str:
        """Request target as sent by the client, including the query string."""
        pass

    @property
    @abstractmethod
    def headers(self) -> Dict[str, str]:
        """Request headers keyed by lower-cased field name."""
        pass

    @property
    def http_version(self) -> str:
        return "1.1"

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """
        Get a request header value.

        Args:
            name: Header field name, case-insensitive.
            default: Value returned when the header is absent.

        Returns:
            The header value or `default`.
        """
        return self.headers.get(name.lower(), default)

    @abstractmethod
    async def read(self) -> bytes:
        """
        Read the complete request body.

        Returns:
            bytes: The body, empty when the request carries none.
        """
        pass
