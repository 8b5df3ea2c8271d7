# ABOUTME: Memory-based middleware implementations package
# ABOUTME: Provides the compose engine producing in-memory middleware pipelines

from .pipeline import ComposedPipeline, compose

__all__ = ["ComposedPipeline", "compose"]
