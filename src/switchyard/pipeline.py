"""The per-request pipeline.

Runs one request through matching, binding, the three middleware tiers
(app, group, route), error recovery, and the handler::

    Matching -> Binding -> Tier[app] -> Tier[group] -> Tier[route] -> Handling -> Done
                            \\____________ on error ____________/
                                         ErrorRecovery[tier] -> Done

Every stage is awaited in turn. No two stages of one request ever run
concurrently, and no tier starts before the previous one has finished.
"""

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any

from switchyard._internal.invoke import invoke
from switchyard.errors import PipelineError, UnrecoveredPipelineError
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.routing.group import RouteGroup
from switchyard.routing.route import RouteMatch
from switchyard.routing.scope import MiddlewareScope
from switchyard.server.negotiation import negotiate

logger = logging.getLogger("switchyard.pipeline")

_NOT_FOUND = Response(body=b"", status=404, content_type="text/plain; charset=utf-8")


def match_route(groups: Sequence[RouteGroup], method: str, url: str) -> RouteMatch | None:
    """Find the first route across *groups* accepting ``method`` and ``url``.

    Groups are scanned in registration order, routes within a group in
    insertion order.
    """
    for group in groups:
        route = group.match(method, url)
        if route is not None:
            return RouteMatch(route=route, group=group, path_params=route.pattern.params(url))
    return None


async def _signal(middleware: Callable[..., Any], *args: Any) -> Any:
    """Run one stage and return its continuation value.

    A raised exception is the stage's error value.
    """
    try:
        return await invoke(middleware, *args)
    except Exception as exc:  # noqa: BLE001
        return exc


async def run_tier(scope: MiddlewareScope, request: Request) -> tuple[bool, Any]:
    """Run one tier's middleware, and its error chain if one of them fails.

    Returns ``(True, None)`` when every middleware continued. Returns
    ``(False, None)`` when an error surfaced and an error-middleware
    resolved it, and ``(False, error)`` when the error chain ran out
    without resolving it. In both failure cases the pipeline stops.
    """
    for middleware in scope.middleware:
        error = await _signal(middleware, request)
        if error is None:
            continue

        logger.debug(
            "%s tier middleware %s signalled %r on %s %s",
            scope.tier,
            _name(middleware),
            error,
            request.method,
            request.url,
        )
        for error_middleware in scope.error_middleware:
            error = await _signal(error_middleware, error, request)
            if error is None:
                return False, None
        return False, error

    return True, None


async def run_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched route's handler and negotiate its return value."""
    handler = match.route.handler
    kwargs = build_handler_kwargs(handler, request)
    result = await invoke(handler, **kwargs)
    if result is None and request.response is not None:
        return request.response
    return negotiate(result)


def build_handler_kwargs(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Inspect the handler signature and build kwargs from the request.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, converted through the annotation)
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in request.path_params:
            value = request.path_params[name]
            if param.annotation is not inspect.Parameter.empty:
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs


async def run_pipeline(
    request: Request,
    *,
    app_scope: MiddlewareScope,
    groups: Sequence[RouteGroup],
) -> Response:
    """Process one request and return its terminal response.

    - No matching route: an empty 404; no middleware runs.
    - A tier's error chain resolves an error: the response written
      through ``request.respond()`` (empty 200 if none was written).
    - A tier's error chain is exhausted: raises ``UnrecoveredPipelineError``.
    - Otherwise: the handler's response.

    The handler runs exactly once, and only when all three tiers complete
    without an error.
    """
    match = match_route(groups, request.method, request.url)
    if match is None:
        logger.debug("No route for %s %s", request.method, request.url)
        return request.finalize(_NOT_FOUND)

    request.pattern = match.route.pattern
    request.path_params = match.path_params

    for scope in (app_scope, match.group, match.route):
        completed, error = await run_tier(scope, request)
        if completed:
            continue
        if error is not None:
            logger.warning(
                "Unrecovered error in %s tier on %s %s: %r",
                scope.tier,
                request.method,
                request.url,
                error,
            )
            cause = error if isinstance(error, BaseException) else PipelineError(error)
            raise UnrecoveredPipelineError(scope.tier, error) from cause
        return request.finalize(request.response or negotiate(None))

    return request.finalize(await run_handler(match, request))


def _name(func: Any) -> str:
    return getattr(func, "__qualname__", None) or type(func).__name__
