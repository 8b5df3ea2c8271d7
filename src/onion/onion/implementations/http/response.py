# ABOUTME: HTTP/1.1 response sink on top of an asyncio StreamWriter
# ABOUTME: Serializes status line and headers on first write, one response per connection

import asyncio

from loguru import logger

from onion.exceptions import status_message
from onion.interfaces.transport import AbstractResponse


# Statuses that never carry a body or a Content-Length
BODYLESS_STATUSES = frozenset({204, 304})


class HttpResponse(AbstractResponse):
    """
    Response written to an asyncio stream.

    The connection always closes after the response, so a streamed payload
    without Content-Length is delimited by the close.
    """

    def __init__(self, writer: asyncio.StreamWriter, http_version: str = "1.1"):
        super().__init__()
        self._writer = writer
        self._http_version = http_version

    def _serialize_head(self) -> bytes:
        lines = [f"HTTP/{self._http_version} {self.status} {status_message(self.status)}"]
        lines.extend(f"{name}: {value}" for name, value in self.header_items())
        lines.append("Connection: close")
        return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1")

    async def _send_head(self) -> None:
        if self.headers_sent:
            return
        self.remove_header("Connection")
        self._writer.write(self._serialize_head())
        self.headers_sent = True

    async def write(self, chunk: bytes | str) -> None:
        if self.finished:
            raise RuntimeError("write after end")
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        await self._send_head()
        if chunk:
            self._writer.write(chunk)
        await self._writer.drain()

    async def end(self, payload: bytes | str | None = None) -> None:
        if self.finished:
            return
        if isinstance(payload, str):
            payload = payload.encode("utf-8")

        if not self.headers_sent:
            if self.status in BODYLESS_STATUSES or 100 <= self.status < 200:
                self.remove_header("Content-Length")
                payload = None
            elif payload is not None and not self.has_header("Content-Length"):
                self.set_header("Content-Length", len(payload))

        await self._send_head()
        if payload:
            self._writer.write(payload)
        self.finished = True
        await self._writer.drain()

    async def abort(self, error: BaseException) -> None:
        if self.finished:
            return
        if self.headers_sent:
            # Too late for an error status, cut the payload short
            logger.debug(f"Aborting response after headers were sent: {type(error).__name__}")
            self.finished = True
            self._writer.close()
            return

        self.status, text = self.fallback_payload(error)
        self._headers.clear()
        self.set_header("Content-Type", "text/plain; charset=utf-8")
        await self.end(text)
