# ABOUTME: Memory-based implementations package
# ABOUTME: In-process compose engine, error channel and transport

from .middleware import ComposedPipeline, compose
from .event import InMemoryErrorChannel
from .transport import MemoryRequest, MemoryResponse

__all__ = [
    "ComposedPipeline",
    "compose",
    "InMemoryErrorChannel",
    "MemoryRequest",
    "MemoryResponse",
]
