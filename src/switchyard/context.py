"""The current request, via ContextVar.

The ASGI adapter sets ``request_var`` for the duration of one pipeline
run and resets it afterwards, so code far from the handler signature
(helpers, logging filters) can reach the request without threading it
through every call. Accessing it outside a request raises ``LookupError``.

``ContextVar`` is task-local under asyncio: interleaved requests never
see each other's context.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from switchyard.http.request import Request

request_var: ContextVar[Request] = ContextVar("switchyard_request")
"""The current request. Set by the ASGI adapter before dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


@contextmanager
def bind_request(request: Request) -> Iterator[Request]:
    """Make *request* current for the body of the ``with`` block."""
    token = request_var.set(request)
    try:
        yield request
    finally:
        request_var.reset(token)
