"""The per-request context.

One ``Request`` is created for each incoming request and handed, by
exclusive reference, through every middleware tier and finally to the
handler. Metadata taken from the network layer (method, path, headers)
is fixed; the slots that pipeline stages fill in (``body``, ``query``,
``path_params``, ``pattern``) are plain mutable attributes.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from switchyard._internal.asgi import Receive
from switchyard.http.headers import Headers
from switchyard.http.response import Response
from switchyard.routing.pattern import PathPattern
from switchyard.server.negotiation import negotiate


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(slots=True, eq=False)
class Request:
    """The mutable request context for one request.

    Raw body bytes are read asynchronously via ``.read()``, ``.text()``,
    ``.json()``. The ``body`` slot holds whatever a body-parsing
    middleware decoded; it stays ``None`` until one runs.

    Error-middleware (and handlers that prefer it to returning a value)
    write the terminal response through ``respond()``.
    """

    method: str
    path: str
    query_string: str = ""
    raw_path: str = ""
    headers: Headers = field(default_factory=Headers)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Filled in by pipeline stages
    body: Any = None
    query: Mapping[str, Any] = field(default_factory=dict)
    path_params: dict[str, str] = field(default_factory=dict)
    pattern: PathPattern | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(default=_empty_receive, repr=False)
    # Private: raw body cache
    _cache: dict[str, Any] = field(default_factory=dict, repr=False)
    # Private: terminal response slot
    _response: Response | None = field(default=None, repr=False)
    _finalized: bool = field(default=False, repr=False)

    # -- Computed properties --

    @property
    def url(self) -> str:
        """Raw path plus query string, as the network layer delivered it.

        Routing matches against this. Percent-escapes in the path stay
        escaped, so an encoded ``%3F`` never starts a query string.
        ``path`` (decoded) is for display.
        """
        target = self.raw_path or self.path
        if self.query_string:
            return f"{target}?{self.query_string}"
        return target

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    # -- Async body access --

    async def read(self) -> bytes:
        """Read the full raw request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncIterator[bytes]:
        """Stream the raw request body in chunks."""
        if "_body" in self._cache:
            if self._cache["_body"]:
                yield self._cache["_body"]
            return
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the raw body as JSON."""
        raw = await self.read()
        return json_module.loads(raw)

    async def text(self) -> str:
        """Read the raw body as text (UTF-8)."""
        raw = await self.read()
        return raw.decode("utf-8")

    # -- Response slot --

    def respond(self, value: Any, status: int | None = None) -> Response:
        """Write the terminal response for this request.

        *value* goes through the same negotiation as handler return
        values (``Response``, ``str``, ``dict``, ``(value, status)``...).
        A later call replaces an earlier one until the request is
        finalized; after that it raises ``RuntimeError``.
        """
        if self._finalized:
            msg = f"Response for {self.method} {self.url} is already finalized"
            raise RuntimeError(msg)
        response = negotiate(value)
        if status is not None:
            response = response.with_status(status)
        self._response = response
        return response

    @property
    def response(self) -> Response | None:
        """The response written so far, if any."""
        return self._response

    @property
    def responded(self) -> bool:
        return self._response is not None

    @property
    def finalized(self) -> bool:
        return self._finalized

    def finalize(self, response: Response) -> Response:
        """Record *response* as terminal and lock the response slot."""
        self._response = response
        self._finalized = True
        return response

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            raw_path=raw_path.decode("latin-1") if raw_path else "",
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=Headers(tuple(scope.get("headers", ()))),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
