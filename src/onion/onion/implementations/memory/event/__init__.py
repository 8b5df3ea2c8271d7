# ABOUTME: Memory-based event implementations package
# ABOUTME: Provides the in-process error-notification channel

from .error_channel import InMemoryErrorChannel, Subscription

__all__ = ["InMemoryErrorChannel", "Subscription"]
