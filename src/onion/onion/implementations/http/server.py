# ABOUTME: asyncio-streams HTTP server delegating every request to one handler
# ABOUTME: Parses one request per connection and applies the transport fallback on failure

import asyncio
from typing import Optional

from loguru import logger

from onion.exceptions import HttpParseError
from onion.interfaces.transport import AbstractServer, RequestHandler

from .request import read_http_request
from .response import HttpResponse


class HttpServer(AbstractServer):
    """
    Minimal HTTP/1.1 server built on `asyncio.start_server`.

    Each connection carries exactly one request. The handler receives an
    `HttpRequest` and an `HttpResponse`; errors escaping the handler are
    logged and answered through `HttpResponse.abort`.

    Example:
        server = await HttpServer(app.callback()).listen("127.0.0.1", 8080)
        await server.serve_forever()
    """

    def __init__(self, handler: RequestHandler):
        super().__init__(handler)
        self._server: Optional[asyncio.Server] = None
        self._logger = logger.bind(name=__name__)
        self._request_count = 0

    @property
    def port(self) -> int | None:
        if self._server is None or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    @property
    def is_serving(self) -> bool:
        return self._server is not None and self._server.is_serving()

    async def listen(self, host: str = "127.0.0.1", port: int = 0, **kwargs) -> "HttpServer":
        if self._server is not None:
            raise RuntimeError("Server is already listening")
        self._server = await asyncio.start_server(self._handle_connection, host, port, **kwargs)
        self._logger.info(f"Listening on http://{host}:{self.port}")
        return self

    async def serve_forever(self) -> None:
        if self._server is None:
            raise RuntimeError("Server is not listening")
        await self._server.serve_forever()

    async def close(self) -> None:
        if self._server is None:
            return
        self._server.close()
        await self._server.wait_closed()
        self._server = None
        self._logger.info(f"Server closed after {self._request_count} request(s)")

    async def _handle_connection(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        response = HttpResponse(writer)
        try:
            try:
                request = await read_http_request(reader)
            except HttpParseError as e:
                self._logger.debug(f"Rejecting malformed request: {e.message}")
                await response.abort(e)
                return

            self._request_count += 1
            response = HttpResponse(writer, http_version=request.http_version)
            try:
                await self.handler(request, response)
            except Exception as e:
                self._logger.opt(exception=e).error(f"Unhandled error for {request.method} {request.url}")
                await response.abort(e)
        except ConnectionError as e:
            self._logger.debug(f"Connection lost: {e}")
        finally:
            if not writer.is_closing():
                writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError as e:
                self._logger.debug(f"Connection reset while closing: {e}")

    async def __aenter__(self) -> "HttpServer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
