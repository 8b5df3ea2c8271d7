# ABOUTME: HTTP/1.1 request parsing on top of asyncio streams
# ABOUTME: Reads the request line and headers eagerly and the body on demand

import asyncio
from typing import Dict

from onion.exceptions import HttpParseError
from onion.interfaces.transport import AbstractRequest


# Header limits
MAX_HEADERS_COUNT = 128
MAX_HEADER_NAME_LEN = 1024
MAX_HEADER_VALUE_LEN = 8192
MAX_TOTAL_HEADERS_SIZE = 32 * 1024
MAX_REQUEST_LINE_LEN = 8192
MAX_BODY_SIZE = 10 * 1024 * 1024
READ_TIMEOUT = 30.0


class HttpRequest(AbstractRequest):
    """Request parsed from an asyncio stream."""

    def __init__(
        self,
        reader: asyncio.StreamReader,
        method: str,
        url: str,
        headers: Dict[str, str],
        http_version: str = "1.1",
    ):
        self._reader = reader
        self._method = method
        self._url = url
        self._headers = headers
        self._http_version = http_version
        self._body: bytes | None = None

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
        """
        Read the body announced by Content-Length.

        Raises:
            HttpParseError: If the length is invalid, too large, or the body is truncated.
        """
        if self._body is not None:
            return self._body

        content_length_str = self._headers.get("content-length", "0")
        try:
            content_length = int(content_length_str)
        except ValueError as e:
            raise HttpParseError(f"Invalid Content-Length: {content_length_str}") from e

        if content_length < 0:
            raise HttpParseError(f"Invalid Content-Length: {content_length_str}")
        if content_length > MAX_BODY_SIZE:
            raise HttpParseError(f"Request body too large: {content_length} > {MAX_BODY_SIZE}", status=413)

        if content_length == 0:
            self._body = b""
            return self._body

        try:
            self._body = await asyncio.wait_for(self._reader.readexactly(content_length), timeout=READ_TIMEOUT)
        except TimeoutError:
            raise HttpParseError("Body read timeout", status=408) from None
        except asyncio.IncompleteReadError as e:
            raise HttpParseError(f"Incomplete body: expected {content_length}, got {len(e.partial)}") from e
        return self._body

    def __repr__(self) -> str:
        return f"HttpRequest({self._method} {self._url})"


async def read_http_request(reader: asyncio.StreamReader) -> HttpRequest:
    """
    Read the request line and headers of one request.

    Args:
        reader: The asyncio StreamReader to read from.

    Returns:
        HttpRequest whose body has not been read yet.

    Raises:
        HttpParseError: If the request line or headers are malformed or too large.
    """
    try:
        request_line = await asyncio.wait_for(reader.readline(), timeout=READ_TIMEOUT)
    except TimeoutError:
        raise HttpParseError("Request timeout", status=408) from None

    if not request_line:
        raise HttpParseError("Empty request")

    if len(request_line) > MAX_REQUEST_LINE_LEN:
        raise HttpParseError(f"Request line too long: {len(request_line)} > {MAX_REQUEST_LINE_LEN}", status=414)

    # "GET /path HTTP/1.1\r\n"
    try:
        parts = request_line.decode("latin-1").strip().split(" ")
    except UnicodeDecodeError as e:
        raise HttpParseError(f"Invalid request encoding: {e}") from e
    if len(parts) != 3 or not parts[2].startswith("HTTP/"):
        raise HttpParseError(f"Invalid request line: {request_line!r}")
    method, url, version = parts

    headers: Dict[str, str] = {}
    total_headers_size = 0

    while True:
        try:
            header_line = await asyncio.wait_for(reader.readline(), timeout=READ_TIMEOUT)
        except TimeoutError:
            raise HttpParseError("Header read timeout", status=408) from None

        if not header_line or header_line in (b"\r\n", b"\n"):
            break

        total_headers_size += len(header_line)
        if total_headers_size > MAX_TOTAL_HEADERS_SIZE:
            raise HttpParseError(
                f"Total headers size exceeds limit: {total_headers_size} > {MAX_TOTAL_HEADERS_SIZE}", status=431
            )

        header_str = header_line.decode("latin-1").strip()
        if ":" not in header_str:
            continue

        name, value = header_str.split(":", 1)
        name = name.strip()
        value = value.strip()

        if len(name) > MAX_HEADER_NAME_LEN:
            raise HttpParseError(f"Header name too long: {len(name)} > {MAX_HEADER_NAME_LEN}", status=431)
        if len(value) > MAX_HEADER_VALUE_LEN:
            raise HttpParseError(f"Header value too long: {len(value)} > {MAX_HEADER_VALUE_LEN}", status=431)
        if len(headers) >= MAX_HEADERS_COUNT:
            raise HttpParseError(f"Too many headers: exceeds limit of {MAX_HEADERS_COUNT}", status=431)

        key = name.lower()
        headers[key] = f"{headers[key]}, {value}" if key in headers else value

    return HttpRequest(reader, method.upper(), url, headers, http_version=version[len("HTTP/") :])
