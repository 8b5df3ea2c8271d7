# ABOUTME: Transport interfaces package
# ABOUTME: Exports the request, response sink and server abstractions consumed by the core

from .request import AbstractRequest
from .response import AbstractResponse
from .server import AbstractServer, RequestHandler

__all__ = ["AbstractRequest", "AbstractResponse", "AbstractServer", "RequestHandler"]
