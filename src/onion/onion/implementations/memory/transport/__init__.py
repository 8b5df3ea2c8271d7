# ABOUTME: Memory-based transport implementations package
# ABOUTME: Provides request and response objects that never touch a socket

from .transport import MemoryRequest, MemoryResponse

__all__ = ["MemoryRequest", "MemoryResponse"]
