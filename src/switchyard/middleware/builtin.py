"""Built-in middleware: body, query, and path-parameter parsing, request logging.

None of these are installed automatically. Add the ones you need at the
tier where they belong::

    app.use(JSONBodyParser())
    app.use(parse_path_params)
    app.use(parse_query_params)
    app.use(RequestLogger())
"""

import json
import logging

from switchyard.errors import HTTPError
from switchyard.http.query import QueryParams
from switchyard.http.request import Request

logger = logging.getLogger("switchyard.access")


class JSONBodyParser:
    """Decode a JSON request body into ``request.body``.

    An empty body leaves ``request.body`` as ``None``. Malformed JSON is
    dropped silently unless ``reject_invalid`` is set, in which case the
    middleware signals ``HTTPError(400)``. Bodies longer than
    ``max_length`` bytes signal ``HTTPError(413)``.

    Usage::

        app.use(JSONBodyParser(reject_invalid=True, max_length=1 << 20))
    """

    __slots__ = ("max_length", "reject_invalid")

    def __init__(self, *, reject_invalid: bool = False, max_length: int | None = None) -> None:
        self.reject_invalid = reject_invalid
        self.max_length = max_length

    async def __call__(self, request: Request) -> HTTPError | None:
        if self.max_length is not None:
            declared = request.content_length
            if declared is not None and declared > self.max_length:
                return HTTPError(413, "Request body too large")

        raw = await request.read()
        if self.max_length is not None and len(raw) > self.max_length:
            return HTTPError(413, "Request body too large")
        if not raw:
            return None

        try:
            request.body = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError):
            if self.reject_invalid:
                return HTTPError(400, "Malformed JSON body")
            logger.debug("Dropped malformed JSON body on %s %s", request.method, request.url)
        return None


def parse_query_params(request: Request) -> None:
    """Populate ``request.query`` from the request URL."""
    request.query = QueryParams.from_url(request.url)


def parse_path_params(request: Request) -> None:
    """Populate ``request.path_params`` from the matched route pattern.

    The dispatcher already binds path parameters before the first tier
    runs; this re-derives them from ``request.pattern`` so middleware
    that rewrote the request still sees consistent values.
    """
    if request.pattern is None:
        request.path_params = {}
        return
    request.path_params = request.pattern.params(request.url)


class RequestLogger:
    """Log each request's method, URL, parameters, and decoded body.

    Place it after the parsers so the record includes what they produced.
    """

    __slots__ = ("level", "logger")

    def __init__(self, log: logging.Logger | None = None, *, level: int = logging.INFO) -> None:
        self.logger = log or logger
        self.level = level

    def __call__(self, request: Request) -> None:
        self.logger.log(
            self.level,
            "%s %s path params: %r query params: %r body: %r",
            request.method,
            request.url,
            request.path_params,
            dict(request.query),
            request.body,
        )
