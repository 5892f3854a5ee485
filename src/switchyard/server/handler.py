"""ASGI handler — translates ASGI scope/messages to switchyard types.

The only component that touches raw ASGI for HTTP requests. Converts the
scope to a ``Request``, dispatches it, and sends the resulting
``Response`` back through ASGI ``send()``.

This is the network-layer side of the pipeline: it bounds requests with
``AppConfig.request_timeout`` and turns failures the pipeline leaves
unanswered into responses.
"""

from collections.abc import Awaitable, Callable
from typing import TypeAlias

import anyio

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard.config import AppConfig
from switchyard.context import bind_request
from switchyard.errors import HTTPError, UnrecoveredPipelineError
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.server.errors import (
    http_error_response,
    internal_error_response,
    timeout_response,
    unrecovered_response,
)
from switchyard.server.sender import send_response

Dispatch: TypeAlias = Callable[[Request], Awaitable[Response]]


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatch: Dispatch,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = await process(request, dispatch=dispatch, config=config)
    await send_response(response, send)


async def process(request: Request, *, dispatch: Dispatch, config: AppConfig) -> Response:
    """Dispatch *request* and always come back with a finalized response."""
    with bind_request(request):
        try:
            if config.request_timeout is None:
                response = await dispatch(request)
            else:
                with anyio.fail_after(config.request_timeout):
                    response = await dispatch(request)
        except UnrecoveredPipelineError as exc:
            response = unrecovered_response(exc, request, config)
        except TimeoutError:
            response = timeout_response(request, config)
        except HTTPError as exc:
            response = http_error_response(exc, request)
        except Exception as exc:
            response = internal_error_response(exc, request, config)

    if not request.finalized:
        request.finalize(response)
    return response
