"""Echo — the smallest useful switchyard app.

Shows the app tier parsers, a per-route validator with its own
error-middleware, and a regex route whose path and query parameters are
both validated before the handler runs.

Run:
    cd examples/echo && uvicorn app:app --port 8000
"""

import re
from typing import Any

from switchyard import App, Request
from switchyard.middleware import (
    JSONBodyParser,
    RequestLogger,
    parse_path_params,
    parse_query_params,
)

INVALID_REQUEST_BODY = "invalid request body"
INVALID_NAME = "invalid name path parameter"
NO_QUERY_PARAMS = "no query params"

_ALNUM = re.compile(r"^[a-zA-Z0-9]+$")

app = App()

app.use(JSONBodyParser())
app.use(parse_path_params)
app.use(parse_query_params)
app.use(RequestLogger())


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


def require_json_object(request: Request) -> str | None:
    """Reject bodies that did not decode to a JSON object."""
    if not isinstance(request.body, dict):
        return INVALID_REQUEST_BODY
    return None


def answer_with_message(*handled: str):
    """Build an error-middleware that resolves the given errors with a 400.

    Anything else is passed on to the next error-middleware.
    """

    def error_middleware(error: Any, request: Request) -> Any:
        if error not in handled:
            return error
        request.respond({"message": error}, status=400)
        return None

    return error_middleware


def require_alnum_name(request: Request) -> str | None:
    if not _ALNUM.match(request.path_params.get("name", "")):
        return INVALID_NAME
    return None


def require_query(request: Request) -> str | None:
    if not request.query:
        return NO_QUERY_PARAMS
    return None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.route("/")
def index():
    return {"message": "ok"}


@app.route("/echo", "POST")
def echo(request: Request):
    return request.body


@app.route(r"/params/(?<name>\w+)")
def params(request: Request):
    return {"query": request.query.to_dict(), "path": request.path_params}


app.find("/echo", "POST").use(require_json_object).use_for_error(
    answer_with_message(INVALID_REQUEST_BODY)
)

(
    app.find(r"/params/(?<name>\w+)", "GET")
    .use(require_alnum_name)
    .use(require_query)
    .use_for_error(answer_with_message(INVALID_NAME))
    .use_for_error(answer_with_message(NO_QUERY_PARAMS))
)
