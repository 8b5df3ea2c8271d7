# ABOUTME: Response finalizer, the implicit outermost middleware of every application pipeline
# ABOUTME: Sets response defaults on the way in and encodes the body into the response sink on the way out

import json
from typing import Any

from loguru import logger
from pydantic_core import to_jsonable_python

from onion.exceptions import status_message
from onion.interfaces.middleware import AbstractMiddleware, Next
from onion.models.context import Context
from onion.models.stream import Readable


POWERED_BY = "onion"
NO_CONTENT_STATUSES = frozenset({204, 304})


def encode_json(body: Any, spaces: int) -> str:
    """
    Encode a structured body.

    Args:
        body: Value to encode. Pydantic models, datetimes and other rich values
            are converted through pydantic's JSON-compatible representation.
        spaces: Indent width, 0 for compact output.

    Returns:
        str: The JSON text.

    Raises:
        ValueError: If the body contains NaN or infinite floats, or values
            pydantic cannot serialize.
    """
    if spaces:
        return json.dumps(body, indent=spaces, ensure_ascii=False, allow_nan=False, default=to_jsonable_python)
    return json.dumps(
        body, separators=(",", ":"), ensure_ascii=False, allow_nan=False, default=to_jsonable_python
    )


class ResponseFinalizer(AbstractMiddleware):
    """
    Writes the final HTTP response once the rest of the pipeline has settled.

    Before the pipeline runs it resets the status to 200 and sets the
    X-Powered-By header when enabled. After the pipeline has unwound it
    encodes `context.body`, in order:

    1. no body and status 200: status becomes 404
    2. status 204 or 304: end without payload
    3. no body: plain-text reason phrase of the status
    4. bytes: written as-is
    5. str: written as-is
    6. stream: piped, its errors are reported to `context.onerror`
    7. anything else: JSON encoded with `app.json_spaces`

    HEAD requests get the same status and headers as GET but never a payload.
    """

    async def __call__(self, context: Context, next: Next) -> None:
        context.status = 200
        if context.app.powered_by:
            context.set("X-Powered-By", POWERED_BY)

        await next()

        response = context.response
        body = context.body
        head = context.method == "HEAD"

        if body is None and context.status == 200:
            context.status = 404

        response.status = context.status

        if context.status in NO_CONTENT_STATUSES:
            await response.end()
            return

        if body is None:
            context.set_type("text")
            body = status_message(context.status)

        if isinstance(body, (bytes, bytearray, memoryview)):
            body = bytes(body)
            context.set_length(len(body))
            await response.end(None if head else body)
            return

        if isinstance(body, str):
            context.set_length(len(body.encode("utf-8")))
            await response.end(None if head else body)
            return

        if Readable.is_stream(body):
            stream = Readable.from_value(body)
            context.body = stream
            if not stream.has_error_listener(context.onerror):
                stream.on_error(context.onerror)
            if head:
                await stream.aclose()
                await response.end()
                return
            await response.pipe(stream)
            return

        text = encode_json(body, context.app.json_spaces)
        if not context.type:
            context.set_type("json")
        context.set_length(len(text.encode("utf-8")))
        logger.trace(f"Context {context.id}: encoded JSON body ({context.length} bytes)")
        await response.end(None if head else text)


respond = ResponseFinalizer()
