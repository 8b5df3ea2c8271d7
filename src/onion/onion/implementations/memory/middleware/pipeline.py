# ABOUTME: ComposedPipeline implementation of the onion-model compose engine
# ABOUTME: Runs middleware by index with once-only continuations and unchanged error propagation

import inspect
from functools import partial
from typing import Iterable, Optional, Tuple

from loguru import logger

from onion.exceptions import MiddlewareExecutionError, MiddlewareTypeError, NextCalledMultipleTimesError
from onion.interfaces.middleware import AbstractMiddlewarePipeline, Middleware, Next, middleware_name
from onion.models.context import Context


class ComposedPipeline(AbstractMiddlewarePipeline):
    """
    In-memory composed middleware pipeline.

    Invoking the pipeline dispatches middleware by index. Each middleware
    receives a continuation bound to the next index; the continuation of the
    last middleware awaits the `next` passed to the pipeline, if any. Code
    before `await next()` therefore runs in registration order and code after
    it in reverse order.

    A single cursor is kept per invocation. Dispatching an index that is not
    past the cursor means some middleware called its continuation twice, and
    fails with `NextCalledMultipleTimesError`.

    Errors raised by a middleware, directly or while suspended, propagate out
    of the invocation unchanged.
    """

    def __init__(self, middleware: Iterable[Middleware], name: str = "ComposedPipeline"):
        """
        Initialize the pipeline.

        Args:
            middleware: Middleware in execution order. The sequence is copied.
            name: Name of the pipeline for identification and logging.
        """
        self._name = name
        self._middleware: Tuple[Middleware, ...] = tuple(middleware)
        self._logger = logger.bind(name=f"{__name__}.{name}")
        self._logger.debug(
            f"Composed pipeline with {len(self._middleware)} middleware: "
            f"{', '.join(middleware_name(m) for m in self._middleware) or '-'}"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def middleware(self) -> Tuple[Middleware, ...]:
        return self._middleware

    async def __call__(self, context: Context, next: Optional[Next] = None) -> None:
        if context is None:
            raise MiddlewareExecutionError(f"{self._name} requires a context", details={"pipeline_name": self._name})

        stack = self._middleware
        cursor = -1

        async def dispatch(index: int) -> None:
            nonlocal cursor
            if index <= cursor:
                raise NextCalledMultipleTimesError(index=index, cursor=cursor)
            cursor = index

            if index >= len(stack):
                # The outer continuation belongs to an enclosing pipeline and takes no arguments
                if next is not None:
                    result = next()
                    if inspect.isawaitable(result):
                        await result
                return

            fn = stack[index]
            if not callable(fn):
                raise MiddlewareTypeError(
                    f"Middleware must be callable, got {type(fn).__name__}",
                    details={"pipeline_name": self._name, "middleware_index": index},
                )

            self._logger.trace(f"Context {context.id}: dispatching {middleware_name(fn)} ({index})")
            result = fn(context, partial(dispatch, index + 1))
            if inspect.isawaitable(result):
                await result

        await dispatch(0)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, middleware={len(self._middleware)})"


def compose(middleware: Iterable[Middleware], name: str = "ComposedPipeline") -> ComposedPipeline:
    """
    Compose middleware into a single middleware.

    Args:
        middleware: Middleware in execution order.
        name: Name of the resulting pipeline.

    Returns:
        ComposedPipeline: Callable as `await pipeline(context, next=None)`.
    """
    return ComposedPipeline(middleware, name=name)
