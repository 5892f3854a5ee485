"""Content negotiation — maps return values to Response objects.

Handlers return plain values; error-middleware pass them to
``Request.respond()``. Both end up here. isinstance-based dispatch,
no magic, fully predictable.
"""

import json as json_module
from typing import Any

from switchyard.http.response import Response


def negotiate(value: Any) -> Response:
    """Convert a handler return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``None``                -> empty 200
    3. ``str``                 -> 200, text/html
    4. ``bytes``               -> 200, application/octet-stream
    5. ``dict`` / ``list``     -> 200, application/json
    6. ``(value, int)``        -> negotiate value, override status
    7. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case None:
            return Response(body=b"", content_type="text/plain; charset=utf-8")
        case str():
            return Response(body=value, content_type="text/html; charset=utf-8")
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json; charset=utf-8",
            )
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, Response, or a (value, status) tuple."
            )
            raise TypeError(msg)
