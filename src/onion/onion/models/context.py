# ABOUTME: Context model holding the per-request state threaded through the pipeline
# ABOUTME: Aggregates request, response sink, application and the response-building fields

import inspect
import ipaddress
from datetime import datetime, UTC
from typing import Any, Dict, List, NoReturn, Optional
from urllib.parse import parse_qs, urlsplit
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from onion.exceptions import HttpError, MiddlewareExecutionError
from onion.interfaces.transport import AbstractRequest, AbstractResponse


# Shorthands accepted by Context.set_type
CONTENT_TYPES: Dict[str, str] = {
    "text": "text/plain; charset=utf-8",
    "txt": "text/plain; charset=utf-8",
    "html": "text/html; charset=utf-8",
    "json": "application/json; charset=utf-8",
    "bin": "application/octet-stream",
    "xml": "application/xml; charset=utf-8",
}


class Context(BaseModel):
    """
    Per-request context.

    One context is created for every request and shared by every middleware
    in the pipeline. Middleware communicates through `status`, `body` and the
    response headers; values of its own go into `state`. Only the response
    finalizer writes to the response sink.

    `body` may be one of:
        - None: nothing produced yet
        - bytes / bytearray: written as-is
        - str: written as-is (UTF-8)
        - Readable or another chunk iterator: streamed
        - anything else: encoded as JSON
    """

    # Context identification
    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique context identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Context creation timestamp")

    # Collaborators
    app: Any = Field(description="The application handling the request")
    request: AbstractRequest = Field(description="Inbound request")
    response: AbstractResponse = Field(description="Response sink")

    # Response building
    status: int = Field(default=200, description="Response status code")
    body: Any = Field(default=None, description="Response body")

    # Middleware-defined values
    state: Dict[str, Any] = Field(default_factory=dict, description="Values shared between middleware")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Request accessors
    @property
    def method(self) -> str:
        return self.request.method

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def path(self) -> str:
        return urlsplit(self.request.url).path or "/"

    @property
    def querystring(self) -> str:
        return urlsplit(self.request.url).query

    @property
    def query(self) -> Dict[str, Any]:
        """Parsed query string; repeated keys map to a list."""
        parsed = parse_qs(self.querystring, keep_blank_values=True)
        return {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}

    @property
    def headers(self) -> Dict[str, str]:
        return self.request.headers

    @property
    def host(self) -> str:
        """Host name without port, empty when the request carries no Host header."""
        host = self.request.get_header("host") or ""
        if host.startswith("["):
            return host[1 : host.find("]")] if "]" in host else host
        return host.split(":", 1)[0]

    @property
    def subdomains(self) -> List[str]:
        """
        Subdomains of the request host, most specific last.

        With the default offset of 2, "tobi.ferrets.example.com" yields
        ["ferrets", "tobi"]. IP addresses have no subdomains.
        """
        host = self.host
        if not host:
            return []
        try:
            ipaddress.ip_address(host)
            return []
        except ValueError:
            pass
        return list(reversed(host.split(".")))[self.app.subdomain_offset :]

    def get(self, field: str, default: Optional[str] = None) -> Optional[str]:
        """Get a request header value, case-insensitive."""
        return self.request.get_header(field, default)

    # Response header accessors
    def set(self, field: str | Dict[str, Any], value: Any = None) -> None:
        """
        Set one response header, or several from a mapping.

        Args:
            field: Header name, or a mapping of names to values.
            value: Header value when `field` is a name.
        """
        if isinstance(field, dict):
            for name, item in field.items():
                self.response.set_header(name, item)
            return
        self.response.set_header(field, value)

    def get_header(self, field: str, default: Optional[str] = None) -> Optional[str]:
        """Get a response header value, case-insensitive."""
        return self.response.get_header(field, default)

    def remove(self, field: str) -> None:
        """Remove a response header."""
        self.response.remove_header(field)

    @property
    def type(self) -> str:
        """Response content type without parameters, empty when unset."""
        content_type = self.response.get_header("content-type") or ""
        return content_type.split(";", 1)[0].strip()

    def set_type(self, value: str) -> None:
        """Set the response content type. Shorthands such as "text" or "json" are expanded."""
        self.response.set_header("Content-Type", CONTENT_TYPES.get(value, value))

    @property
    def length(self) -> Optional[int]:
        value = self.response.get_header("content-length")
        return int(value) if value is not None else None

    def set_length(self, value: int) -> None:
        self.response.set_header("Content-Length", int(value))

    # Error handling
    def throw(self, status: int = 500, message: Optional[str] = None, **details: Any) -> NoReturn:
        """
        Abort the pipeline with an `HttpError`.

        Example:
            if context.state.get("user") is None:
                context.throw(401, "login required")
        """
        raise HttpError(status, message, details=details or None)

    async def onerror(self, error: Any) -> None:
        """
        Per-request error handler.

        Publishes the error on the application's error channel, then hands it
        to the transport fallback, which answers with a bare status when the
        headers are still unsent and otherwise closes the connection.

        Args:
            error: The error that failed the request. None is ignored.
        """
        if error is None:
            return
        if not isinstance(error, BaseException):
            error = MiddlewareExecutionError(f"non-error thrown: {error!r}")

        self.app.emit("error", error, self)

        result = self.response.abort(error)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return f"Context(id={self.id!r}, method={self.method!r}, url={self.url!r}, status={self.status})"
