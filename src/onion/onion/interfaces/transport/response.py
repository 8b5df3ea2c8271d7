# ABOUTME: Abstract response sink interface for the transport boundary
# ABOUTME: Defines status/header assignment, streaming writes and the terminal end operation

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, AsyncIterable, Dict, Tuple

from onion.exceptions import status_message

if TYPE_CHECKING:
    from onion.models.stream import Readable


class AbstractResponse(ABC):
    """
    Writable response sink handed to the application by a transport.

    Header bookkeeping lives here so that every transport exposes the same
    case-insensitive header map; transports only implement the wire side:
    `write`, `end` and `abort`. Once headers are sent, status and header
    changes are no longer observable by the client.
    """

    def __init__(self) -> None:
        self.status: int = 200
        self._headers: Dict[str, Tuple[str, str]] = {}
        self.headers_sent: bool = False
        self.finished: bool = False

    def set_header(self, name: str, value: object) -> None:
        self._headers[name.lower()] = (name, str(value))

    def get_header(self, name: str, default: str | None = None) -> str | None:
        entry = self._headers.get(name.lower())
        return entry[1] if entry is not None else default

    def has_header(self, name: str) -> bool:
        return name.lower() in self._headers

    def remove_header(self, name: str) -> None:
        self._headers.pop(name.lower(), None)

    def get_headers(self) -> Dict[str, str]:
        """Return the headers keyed by lower-cased field name."""
        return {key: value for key, (_, value) in self._headers.items()}

    def header_items(self) -> list[Tuple[str, str]]:
        """Return the headers as (original name, value) pairs in insertion order."""
        return list(self._headers.values())

    @abstractmethod
    async def write(self, chunk: bytes | str) -> None:
        """
        Write a chunk of the payload, sending status and headers first if needed.

        Args:
            chunk: Payload bytes, or text encoded as UTF-8.
        """
        pass

    @abstractmethod
    async def end(self, payload: bytes | str | None = None) -> None:
        """
        Finish the response, optionally writing a final payload.

        Calling `end` on a finished response is a no-op.

        Args:
            payload: Optional final chunk.
        """
        pass

    @abstractmethod
    async def abort(self, error: BaseException) -> None:
        """
        Transport fallback for a request that failed.

        Implementations answer with a bare error status when headers are still
        unsent and otherwise terminate the connection.

        Args:
            error: The error that failed the request.
        """
        pass

    @staticmethod
    def fallback_payload(error: BaseException) -> Tuple[int, str]:
        """
        Status and plain-text body a transport answers a failed request with.

        Errors carrying a 4xx/5xx `status` keep it; their message is only
        used when the error is marked `expose`.
        """
        status = getattr(error, "status", None)
        if not isinstance(status, int) or not 400 <= status < 600:
            status = 500
        if getattr(error, "expose", False):
            return status, str(error)
        return status, status_message(status)

    async def pipe(self, stream: "Readable | AsyncIterable[bytes]") -> None:
        """
        Stream every chunk of `stream` into the sink, then end the response.

        Args:
            stream: Readable byte stream providing the payload.
        """
        async for chunk in stream:
            if self.finished:
                break
            await self.write(chunk)
        await self.end()
