# ABOUTME: Event models package exports
# ABOUTME: Exports the ErrorEvent published on the error channel

from .error_event import ErrorEvent

__all__ = ["ErrorEvent"]
