"""Middleware and ErrorMiddleware protocols.

A middleware is any callable matching::

    async def my_mw(request: Request) -> object | None: ...

The awaited return value is the middleware's signal: ``None`` means
"continue", anything else is an error value. Raising an exception is the
same as returning it. Plain ``def`` functions work too.

An error-middleware is any callable matching::

    async def my_emw(error: object, request: Request) -> object | None: ...

Returning ``None`` resolves the error (write the response with
``request.respond()`` first). Returning a value -- the same error or a
new one -- passes it to the next error-middleware in the same tier.

No base class required. The framework checks the shape, not the lineage.
"""

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from switchyard.http.request import Request


class Middleware(Protocol):
    """Protocol for switchyard middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def require_json(request: Request) -> object | None:
            if request.content_type != "application/json":
                return HTTPError(415)
            return None

        # Class middleware
        class TokenCheck:
            async def __call__(self, request: Request) -> object | None:
                ...
    """

    async def __call__(self, request: "Request") -> Any: ...


class ErrorMiddleware(Protocol):
    """Protocol for switchyard error-middleware.

    ::

        async def invalid_body(error: object, request: Request) -> object | None:
            if error is not InvalidBody:
                return error
            request.respond({"message": "invalid request body"}, status=400)
            return None
    """

    async def __call__(self, error: Any, request: "Request") -> Any: ...
