"""Fallback responses for failures the pipeline does not answer itself.

The pipeline never invents an error response: an error that exhausts its
tier's error chain, or an exception raised by a handler, propagates out
of ``App.dispatch()``. The ASGI adapter still owes the client a response,
and builds it here.
"""

import logging

from switchyard.config import AppConfig
from switchyard.errors import HTTPError, UnrecoveredPipelineError
from switchyard.http.request import Request
from switchyard.http.response import Response

logger = logging.getLogger("switchyard.server")

_PLAIN = "text/plain; charset=utf-8"


def unrecovered_response(
    exc: UnrecoveredPipelineError,
    request: Request,
    config: AppConfig,
) -> Response:
    """Response for an error no error-middleware resolved.

    Preference order:
    1. A response an error-middleware already wrote via ``respond()``
    2. The status, detail, and headers of an ``HTTPError`` error value
    3. ``config.unrecovered_status`` with a generic message
    """
    if request.response is not None:
        return request.response

    error = exc.error
    if isinstance(error, HTTPError):
        return http_error_response(error, request)

    logger.error(
        "%d %s %s — unrecovered %s tier error: %r",
        config.unrecovered_status,
        request.method,
        request.url,
        exc.tier,
        error,
    )
    detail = f"Unrecovered {exc.tier} error: {error!r}" if config.debug else "Internal Server Error"
    return Response(body=detail, status=config.unrecovered_status, content_type=_PLAIN)


def http_error_response(exc: HTTPError, request: Request) -> Response:
    """Response carrying an ``HTTPError``'s status, detail, and headers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.url, exc.detail)
    response = Response(body=exc.detail, status=exc.status, content_type=_PLAIN)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(exc: Exception, request: Request, config: AppConfig) -> Response:
    """Response for an exception raised outside the middleware tiers (the handler)."""
    logger.exception("500 %s %s", request.method, request.url)
    detail = f"{type(exc).__name__}: {exc}" if config.debug else "Internal Server Error"
    return Response(body=detail, status=500, content_type=_PLAIN)


def timeout_response(request: Request, config: AppConfig) -> Response:
    """Response for a request that overran ``config.request_timeout``."""
    logger.warning(
        "504 %s %s — no response within %.3fs", request.method, request.url, config.request_timeout
    )
    return Response(body="Gateway Timeout", status=504, content_type=_PLAIN)
