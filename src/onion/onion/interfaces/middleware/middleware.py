# ABOUTME: Middleware contract shared by functions and class-based middleware
# ABOUTME: A middleware receives the request context and a continuation for the rest of the pipeline

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Union

if TYPE_CHECKING:
    from onion.models.context import Context


Next = Callable[[], Awaitable[None]]  # Continuation representing the rest of the pipeline.
MiddlewareFunction = Callable[["Context", Next], Union[Awaitable[Any], Any]]


class AbstractMiddleware(ABC):
    """
    Abstract base class for class-based middleware.

    Plain functions satisfy the middleware contract as well; this base class
    exists for middleware that carries configuration or state. The contract:

    - code before `await next()` runs on the way in, in registration order
    - code after `await next()` runs on the way out, in reverse order
    - `next` may be awaited at most once

    Example:
        class Timing(AbstractMiddleware):
            async def __call__(self, context, next):
                start = time.perf_counter()
                await next()
                context.set("X-Response-Time", f"{time.perf_counter() - start:.3f}s")
    """

    @property
    def name(self) -> str:
        """Name used in logs."""
        return self.__class__.__name__

    @abstractmethod
    async def __call__(self, context: "Context", next: Next) -> None:
        """
        Process the request.

        Args:
            context: Per-request context shared by the whole pipeline.
            next: Continuation running the rest of the pipeline.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


Middleware = Union[AbstractMiddleware, MiddlewareFunction]


def middleware_name(middleware: object) -> str:
    """Return a printable name for any middleware value."""
    if isinstance(middleware, AbstractMiddleware):
        return middleware.name
    return getattr(middleware, "__name__", None) or "-"
