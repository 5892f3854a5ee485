"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request) -> object | None

An error-middleware is any callable matching:
    async def emw(error: object, request: Request) -> object | None

Built-in middleware:
    JSONBodyParser -- Decode JSON bodies into ``request.body``
    parse_query_params -- Fill ``request.query`` from the URL
    parse_path_params -- Fill ``request.path_params`` from the matched pattern
    RequestLogger -- Log method, URL, parameters, and body
"""

from switchyard.middleware.builtin import (
    JSONBodyParser,
    RequestLogger,
    parse_path_params,
    parse_query_params,
)
from switchyard.middleware.protocol import ErrorMiddleware, Middleware

__all__ = [
    "ErrorMiddleware",
    "JSONBodyParser",
    "Middleware",
    "RequestLogger",
    "parse_path_params",
    "parse_query_params",
]
