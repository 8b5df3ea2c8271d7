# ABOUTME: Helpers shared by onion tests
# ABOUTME: Runs in-memory requests through an application

from onion import Application
from onion.implementations.memory.transport import MemoryRequest, MemoryResponse


async def request(
    app: Application, method: str = "GET", url: str = "/", headers=None, body: bytes | str = b"", on_error=None
) -> MemoryResponse:
    """Run one in-memory request through `app` and return the finished response."""
    response = MemoryResponse()
    handler = app.callback()
    if on_error is None:
        await handler(MemoryRequest(method, url, headers, body), response)
    else:
        await handler(MemoryRequest(method, url, headers, body), response, on_error)
    return response
