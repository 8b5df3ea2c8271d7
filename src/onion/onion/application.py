# ABOUTME: Application holding configuration and the middleware registry
# ABOUTME: Builds the composed request handler, creates contexts and reports unhandled errors

import inspect
from typing import Any, Awaitable, Callable, List, Optional

from loguru import logger

from onion.config.settings import ApplicationConfig
from onion.exceptions import ConfigurationException, MiddlewareTypeError
from onion.implementations.http import HttpServer
from onion.implementations.memory.event import InMemoryErrorChannel
from onion.implementations.memory.middleware import ComposedPipeline, compose
from onion.interfaces.event import AbstractErrorChannel, ErrorHandler
from onion.interfaces.middleware import Middleware, middleware_name
from onion.interfaces.transport import AbstractRequest, AbstractResponse
from onion.middleware.respond import respond
from onion.models.context import Context
from onion.models.event.error_event import ErrorEvent


ErrorCallback = Callable[[BaseException], Optional[Awaitable[None]]]
Handler = Callable[..., Awaitable[None]]


class Application:
    """
    An application: configuration plus an ordered middleware registry.

    Middleware registered with `use` runs in registration order on the way
    in and in reverse order on the way out, wrapped by the response
    finalizer. Errors reaching a request's error handler are published on
    `errors`; the default subscriber logs them unless `output_errors` is off
    or the error carries status 404.

    Example:
        app = Application()

        async def hello(context, next):
            context.body = {"hello": "world"}

        app.use(hello)
        server = await app.listen("127.0.0.1", 3000)
    """

    def __init__(
        self,
        config: Optional[ApplicationConfig] = None,
        *,
        error_channel: Optional[AbstractErrorChannel] = None,
    ):
        """
        Initialize the application.

        Args:
            config: Explicit configuration. Defaults to `ApplicationConfig()`,
                which does not read the environment. Use
                `ApplicationConfig.from_settings()` for environment-driven values.
            error_channel: Channel used for error notifications. An in-memory
                channel with `onerror` as default handler is created when omitted.
        """
        config = config if config is not None else ApplicationConfig()
        self.config = config
        self.env: str = config.environment
        self.output_errors: bool = bool(config.output_errors)
        self.powered_by: bool = config.powered_by
        self.json_spaces: int = config.json_spaces
        self.subdomain_offset: int = config.subdomain_offset
        self.middleware: List[Middleware] = []

        if error_channel is None:
            error_channel = InMemoryErrorChannel(default_handler=self.onerror)
        self.errors: AbstractErrorChannel = error_channel

        self._logger = logger.bind(name=__name__)

    def use(self, fn: Middleware) -> "Application":
        """
        Register a middleware.

        Args:
            fn: Function `(context, next)` or `AbstractMiddleware` instance.

        Returns:
            Application: self, for chaining.

        Raises:
            MiddlewareTypeError: If `fn` is None.
        """
        if fn is None:
            raise MiddlewareTypeError("Middleware must not be None")
        self._logger.debug(f"use {middleware_name(fn)}")
        self.middleware.append(fn)
        return self

    def compose(self) -> ComposedPipeline:
        """Compose the response finalizer and the registered middleware into one pipeline."""
        if self.json_spaces < 0:
            raise ConfigurationException(
                "json_spaces must be >= 0", code="INVALID_JSON_SPACES", details={"json_spaces": self.json_spaces}
            )
        return compose([respond, *self.middleware], name="Application")

    def create_context(self, request: AbstractRequest, response: AbstractResponse) -> Context:
        """Create the context for one request."""
        return Context(app=self, request=request, response=response)

    def callback(self) -> Handler:
        """
        Return a request handler for a transport.

        The pipeline is composed once here and reused by every request the
        handler serves; middleware registered later is only picked up by
        handlers created afterwards.

        Returns:
            Async callable `(request, response, on_error=None)`. When the
            pipeline fails the error goes to `on_error` if given, otherwise to
            the context's own `onerror`.
        """
        pipeline = self.compose()

        async def handle_request(
            request: AbstractRequest,
            response: AbstractResponse,
            on_error: Optional[ErrorCallback] = None,
        ) -> None:
            context = self.create_context(request, response)
            try:
                await pipeline(context)
            except Exception as e:
                self._logger.debug(f"Context {context.id}: pipeline failed with {type(e).__name__}")
                result = (on_error or context.onerror)(e)
                if inspect.isawaitable(result):
                    await result

        return handle_request

    async def listen(self, host: str = "127.0.0.1", port: int = 0, **kwargs: Any) -> HttpServer:
        """
        Shorthand for `await HttpServer(app.callback()).listen(host, port)`.

        Returns:
            HttpServer: The listening server.
        """
        server = HttpServer(self.callback())
        return await server.listen(host, port, **kwargs)

    # Error notification
    def on(self, event: str, handler: ErrorHandler) -> str:
        """
        Subscribe to application events. Only "error" is recognized.

        Returns:
            str: Subscription id usable with `errors.unsubscribe`.
        """
        if event != "error":
            raise ConfigurationException(f"Unknown application event: {event!r}", details={"event": event})
        return self.errors.subscribe(handler)

    def emit(self, event: str, error: BaseException, context: Optional[Context] = None) -> None:
        """Broadcast an error on the error channel."""
        if event != "error":
            raise ConfigurationException(f"Unknown application event: {event!r}", details={"event": event})
        self.errors.publish(ErrorEvent(error=error, context=context))

    def onerror(self, event: ErrorEvent) -> None:
        """
        Default error handler.

        Does nothing when `output_errors` is off or the error has status 404,
        otherwise logs the error with its traceback.
        """
        if not self.output_errors:
            return
        if event.status == 404:
            return
        error = event.error
        self._logger.opt(exception=error).error(f"{type(error).__name__}: {error}")

    def __repr__(self) -> str:
        return f"Application(env={self.env!r}, middleware={len(self.middleware)})"
