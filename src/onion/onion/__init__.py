# ABOUTME: onion package initialization
# ABOUTME: Exposes the application, context and compose engine of the middleware core

"""
onion: a minimal HTTP request-handling core.

Middleware registered on an `Application` is composed into a single
request handler following the onion model: code before `await next()` runs
in registration order, code after it in reverse order. The response
finalizer then encodes `context.body` into the response.
"""

from onion.application import Application
from onion.config.settings import ApplicationConfig
from onion.implementations.memory.middleware import ComposedPipeline, compose
from onion.interfaces.middleware import AbstractMiddleware
from onion.models.context import Context
from onion.models.stream import Readable

__version__ = "0.1.0"

__all__ = [
    "Application",
    "ApplicationConfig",
    "AbstractMiddleware",
    "ComposedPipeline",
    "Context",
    "Readable",
    "compose",
]
