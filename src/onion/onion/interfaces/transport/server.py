# ABOUTME: Abstract server interface for the transport boundary
# ABOUTME: Defines how a transport binds a request handler to a listening socket

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Awaitable, Callable

if TYPE_CHECKING:
    from .request import AbstractRequest
    from .response import AbstractResponse


RequestHandler = Callable[["AbstractRequest", "AbstractResponse"], Awaitable[None]]


class AbstractServer(ABC):
    """
    A transport server bound to a single request handler.

    The application never touches sockets; `Application.listen` builds a
    server around `Application.callback()` and delegates to `listen`.
    """

    def __init__(self, handler: RequestHandler):
        self.handler = handler

    @abstractmethod
    async def listen(self, host: str = "127.0.0.1", port: int = 0, **kwargs) -> "AbstractServer":
        """
        Start accepting connections.

        Args:
            host: Interface to bind.
            port: Port to bind, 0 selects a free port.
            **kwargs: Transport-specific options.

        Returns:
            The server itself, listening.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Stop accepting connections and release the socket."""
        pass

    @property
    @abstractmethod
    def port(self) -> int | None:
        """The bound port, or None when not listening."""
        pass
