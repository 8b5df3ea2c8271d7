# ABOUTME: Event interfaces package
# ABOUTME: Exports the error-notification channel abstraction

from .error_channel import AbstractErrorChannel, ErrorHandler

__all__ = ["AbstractErrorChannel", "ErrorHandler"]
