# ABOUTME: Abstract composed pipeline interface
# ABOUTME: A composed pipeline is itself a middleware wrapping an ordered sequence of middleware

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional, Tuple

from .middleware import AbstractMiddleware

if TYPE_CHECKING:
    from onion.models.context import Context
    from .middleware import Middleware, Next


class AbstractMiddlewarePipeline(AbstractMiddleware):
    """
    Abstract base class for composed middleware pipelines.

    A pipeline holds an immutable snapshot of the middleware it was built
    from and runs them in order for each invocation. Because it satisfies the
    middleware contract, pipelines nest inside other pipelines.
    """

    @property
    @abstractmethod
    def middleware(self) -> Tuple["Middleware", ...]:
        """
        The middleware this pipeline runs, in execution order.

        Returns:
            tuple: Snapshot taken when the pipeline was composed.
        """
        pass

    @abstractmethod
    async def __call__(self, context: "Context", next: Optional["Next"] = None) -> None:
        """
        Run the pipeline for one request.

        Args:
            context: Per-request context.
            next: Optional continuation invoked after the last middleware.

        Raises:
            Exception: Any error raised by a middleware, unchanged.
        """
        pass

    def __len__(self) -> int:
        return len(self.middleware)
