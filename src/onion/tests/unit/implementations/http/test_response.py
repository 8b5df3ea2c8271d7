# ABOUTME: Unit tests for the asyncio HTTP response sink
# ABOUTME: Tests head serialization, Content-Length handling and the abort fallback against a recording writer

import pytest

from onion.exceptions import HttpError
from onion.implementations.http import HttpResponse


class RecordingWriter:
    """Minimal StreamWriter stand-in that keeps everything written."""

    def __init__(self):
        self.data = b""
        self.closed = False

    def write(self, data: bytes) -> None:
        self.data += data

    async def drain(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    def is_closing(self) -> bool:
        return self.closed


def _split(data: bytes) -> tuple[list[str], bytes]:
    head, _, body = data.partition(b"\r\n\r\n")
    return head.decode("latin-1").split("\r\n"), body


class TestHttpResponse:
    """Unit tests for HttpResponse."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_end_with_payload_sets_length(self):
        writer = RecordingWriter()
        response = HttpResponse(writer)
        response.set_header("Content-Type", "text/plain")

        await response.end(b"hello")

        lines, body = _split(writer.data)
        assert lines[0] == "HTTP/1.1 200 OK"
        assert "Content-Length: 5" in lines
        assert lines[-1] == "Connection: close"
        assert body == b"hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_end_without_payload_leaves_length_unset(self):
        """Test ending without payload does not announce an empty body."""
        writer = RecordingWriter()
        response = HttpResponse(writer)
        response.set_header("X-Powered-By", "onion")

        await response.end()

        lines, body = _split(writer.data)
        assert lines[1:] == ["X-Powered-By: onion", "Connection: close"]
        assert body == b""
        assert response.finished

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_explicit_length_kept_without_payload(self):
        writer = RecordingWriter()
        response = HttpResponse(writer)
        response.set_header("Content-Length", 12)

        await response.end()

        lines, _ = _split(writer.data)
        assert "Content-Length: 12" in lines

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [204, 304])
    async def test_bodyless_status_drops_length_and_payload(self, status):
        writer = RecordingWriter()
        response = HttpResponse(writer)
        response.status = status
        response.set_header("Content-Length", 3)

        await response.end(b"abc")

        lines, body = _split(writer.data)
        assert not any(line.startswith("Content-Length") for line in lines)
        assert body == b""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_streamed_writes_are_close_delimited(self):
        writer = RecordingWriter()
        response = HttpResponse(writer)

        await response.write(b"one,")
        await response.write("two")
        await response.end()

        lines, body = _split(writer.data)
        assert not any(line.startswith("Content-Length") for line in lines)
        assert body == b"one,two"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_abort_before_headers_sent(self):
        writer = RecordingWriter()
        response = HttpResponse(writer)
        response.set_header("X-Powered-By", "onion")

        await response.abort(HttpError(409, "version conflict"))

        lines, body = _split(writer.data)
        assert lines[0] == "HTTP/1.1 409 Conflict"
        assert "X-Powered-By: onion" not in lines
        assert "Content-Length: 16" in lines
        assert body == b"version conflict"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_abort_after_headers_sent_closes(self):
        writer = RecordingWriter()
        response = HttpResponse(writer)
        await response.write(b"partial")

        await response.abort(RuntimeError("x"))

        assert writer.closed
        assert response.finished
        assert writer.data.endswith(b"partial")
