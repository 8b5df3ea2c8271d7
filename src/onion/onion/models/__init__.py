# ABOUTME: Models package for the onion core
# ABOUTME: Exports the request context, stream body and error event models

from .context import Context, CONTENT_TYPES
from .stream import Readable
from .event.error_event import ErrorEvent

__all__ = ["Context", "CONTENT_TYPES", "Readable", "ErrorEvent"]
