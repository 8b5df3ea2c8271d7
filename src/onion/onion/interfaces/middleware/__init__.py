# ABOUTME: Middleware interfaces package
# ABOUTME: Exports the middleware contract and the composed pipeline abstraction

from .middleware import AbstractMiddleware, Middleware, MiddlewareFunction, Next, middleware_name
from .pipeline import AbstractMiddlewarePipeline

__all__ = [
    "AbstractMiddleware",
    "AbstractMiddlewarePipeline",
    "Middleware",
    "MiddlewareFunction",
    "Next",
    "middleware_name",
]
