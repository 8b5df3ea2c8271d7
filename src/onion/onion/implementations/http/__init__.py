# ABOUTME: asyncio HTTP transport package
# ABOUTME: Exports the stream-based request, response sink and server

from .request import HttpRequest, read_http_request
from .response import HttpResponse
from .server import HttpServer

__all__ = ["HttpRequest", "HttpResponse", "HttpServer", "read_http_request"]
