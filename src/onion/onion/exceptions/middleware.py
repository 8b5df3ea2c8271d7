# ABOUTME: Middleware-specific exception classes for error handling
# ABOUTME: Provides structured errors for pipeline composition and continuation misuse

from onion.exceptions.base import OnionException


class MiddlewareError(OnionException):
    """Base exception class for middleware-related errors.

    This is the base class for all middleware-specific exceptions raised by
    the compose engine. Should be used as a base for more specific middleware
    exceptions rather than being raised directly.
    """

    pass


class NextCalledMultipleTimesError(MiddlewareError):
    """Exception raised when a middleware invokes its continuation more than once.

    A continuation may be awaited at most once per middleware per request. A
    second call fails the whole composed invocation. This is a programming
    error inside the middleware, never a runtime condition.
    """

    def __init__(self, index: int, cursor: int):
        super().__init__(
            "next() called multiple times",
            code="NEXT_CALLED_MULTIPLE_TIMES",
            details={"index": index, "cursor": cursor},
        )


class MiddlewareTypeError(MiddlewareError):
    """Exception raised when a pipeline stage is not callable.

    Registration performs no validation beyond existence, so a non-callable
    value is only detected when dispatch reaches it.
    """

    pass


class MiddlewareExecutionError(MiddlewareError):
    """Exception raised when a pipeline cannot run at all.

    Used for failures around the pipeline rather than inside a middleware,
    e.g. invoking a composed pipeline without a context.
    """

    pass
