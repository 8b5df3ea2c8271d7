# ABOUTME: Readable byte stream used as a streaming response body
# ABOUTME: Wraps async or sync chunk iterables and routes iteration errors to error listeners

import inspect
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import Callable, List, Union

from loguru import logger


ErrorListener = Callable[[BaseException], object]
ChunkSource = Union[AsyncIterable[Union[bytes, str]], Iterable[Union[bytes, str]]]


class Readable:
    """
    A readable byte stream with error listeners.

    Iterating a `Readable` yields the chunks of its source as bytes. When the
    source raises, the error is handed to every registered error listener and
    iteration stops. With no listener registered the error propagates to the
    consumer instead.

    Example:
        async def numbers():
            for i in range(3):
                yield f"{i}\\n"

        context.body = Readable(numbers())
    """

    def __init__(self, source: ChunkSource, encoding: str = "utf-8"):
        if not isinstance(source, (AsyncIterable, Iterable)) or isinstance(source, (bytes, str)):
            raise TypeError(f"Readable source must be an iterable of chunks, got {type(source).__name__}")
        self._source = source
        self._encoding = encoding
        self._error_listeners: List[ErrorListener] = []
        self.consumed = False
        self.errored: BaseException | None = None

    @staticmethod
    def is_stream(value: object) -> bool:
        """Whether `value` is a Readable or an iterable that can be wrapped into one."""
        if isinstance(value, Readable):
            return True
        if isinstance(value, AsyncIterable):
            return True
        # Generators and iterators, but not containers meant for JSON encoding
        return inspect.isgenerator(value) or (
            isinstance(value, Iterable) and hasattr(value, "__next__") and not isinstance(value, (bytes, str))
        )

    @classmethod
    def from_value(cls, value: Union["Readable", ChunkSource]) -> "Readable":
        return value if isinstance(value, Readable) else cls(value)

    @property
    def error_listeners(self) -> List[ErrorListener]:
        return list(self._error_listeners)

    def on_error(self, listener: ErrorListener) -> None:
        """Register `listener` to receive errors raised while reading."""
        self._error_listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        if listener in self._error_listeners:
            self._error_listeners.remove(listener)

    def has_error_listener(self, listener: ErrorListener) -> bool:
        return listener in self._error_listeners

    def _encode(self, chunk: Union[bytes, bytearray, str]) -> bytes:
        if isinstance(chunk, str):
            return chunk.encode(self._encoding)
        if isinstance(chunk, (bytes, bytearray, memoryview)):
            return bytes(chunk)
        raise TypeError(f"Stream chunks must be bytes or str, got {type(chunk).__name__}")

    async def _iterate_source(self) -> AsyncIterator[Union[bytes, str]]:
        if isinstance(self._source, AsyncIterable):
            async for chunk in self._source:
                yield chunk
        else:
            for chunk in self._source:
                yield chunk

    async def _emit_error(self, error: BaseException) -> None:
        for listener in list(self._error_listeners):
            result = listener(error)
            if inspect.isawaitable(result):
                await result

    async def __aiter__(self) -> AsyncIterator[bytes]:
        if self.consumed:
            raise RuntimeError("Readable stream has already been consumed")
        self.consumed = True
        try:
            async for chunk in self._iterate_source():
                yield self._encode(chunk)
        except Exception as e:
            self.errored = e
            if not self._error_listeners:
                raise
            logger.debug(f"Readable stream failed with {type(e).__name__}, notifying {len(self._error_listeners)} listener(s)")
            await self._emit_error(e)

    async def read(self) -> bytes:
        """Consume the whole stream and return its content."""
        return b"".join([chunk async for chunk in self])

    async def aclose(self) -> None:
        """Close the underlying source without reading it."""
        self.consumed = True
        close = getattr(self._source, "aclose", None) or getattr(self._source, "close", None)
        if close is not None:
            result = close()
            if inspect.isawaitable(result):
                await result
