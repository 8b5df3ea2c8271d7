# ABOUTME: In-memory request and response implementations of the transport boundary
# ABOUTME: Records everything written to the sink, used for tests and for embedding without sockets

from typing import Dict, List, Optional

from onion.interfaces.transport import AbstractRequest, AbstractResponse


class MemoryRequest(AbstractRequest):
    """
    Request built from plain values.

    Example:
        request = MemoryRequest("POST", "/items?page=2", {"Host": "example.com"}, b'{"a": 1}')
    """

    def __init__(
        self,
        method: str = "GET",
        url: str = "/",
        headers: Optional[Dict[str, str]] = None,
        body: bytes | str = b"",
        http_version: str = "1.1",
    ):
        self._method = method.upper()
        self._url = url
        self._headers = {name.lower(): value for name, value in (headers or {}).items()}
        self._body = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        self._http_version = http_version

    @property
    def method(self) -> str:
        return self._method

    @property
    def url(self) -> str:
        return self._url

    @property
    def headers(self) -> Dict[str, str]:
        return self._headers

    @property
    def http_version(self) -> str:
        return self._http_version

    async def read(self) -> bytes:
        return self._body

    def __repr__(self) -> str:
        return f"MemoryRequest({self._method} {self._url})"


class MemoryResponse(AbstractResponse):
    """
    Response sink that keeps the written payload in memory.

    Attributes:
        chunks: Every chunk written, in order.
        error: The error passed to `abort`, if any.
        aborted: Whether the transport fallback ran.
    """

    def __init__(self) -> None:
        super().__init__()
        self.chunks: List[bytes] = []
        self.error: BaseException | None = None
        self.aborted = False
        self.end_count = 0

    @property
    def payload(self) -> bytes:
        return b"".join(self.chunks)

    @property
    def text(self) -> str:
        return self.payload.decode("utf-8")

    def _append(self, chunk: bytes | str) -> None:
        self.chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk))

    async def write(self, chunk: bytes | str) -> None:
        if self.finished:
            raise RuntimeError("write after end")
        self.headers_sent = True
        self._append(chunk)

    async def end(self, payload: bytes | str | None = None) -> None:
        if self.finished:
            return
        self.end_count += 1
        if payload is not None:
            self._append(payload)
        self.headers_sent = True
        self.finished = True

    async def abort(self, error: BaseException) -> None:
        self.error = error
        self.aborted = True
        if self.finished:
            return
        if not self.headers_sent:
            self.status, text = self.fallback_payload(error)
            self._headers.clear()
            self.set_header("Content-Type", "text/plain; charset=utf-8")
            self.set_header("Content-Length", len(text.encode("utf-8")))
            self._append(text)
            self.headers_sent = True
        self.finished = True

    def __repr__(self) -> str:
        return f"MemoryResponse(status={self.status}, finished={self.finished}, bytes={len(self.payload)})"
