"""Users — in-memory CRUD behind a route group.

The ``/users`` routes live in their own ``RouteGroup``. Body validation
runs at the route tier, and a shared error-middleware turns validation
failures into 400 responses before the handler is ever called.

Run:
    cd examples/users && uvicorn app:app --port 8000
"""

import re
import threading
from dataclasses import asdict, dataclass
from typing import Any

from switchyard import App, Request, RouteGroup
from switchyard.middleware import JSONBodyParser, parse_query_params

app = App()
app.use(JSONBodyParser())
app.use(parse_query_params)

users = RouteGroup("users")


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    nick: str


_users: list[User] = []
_next_id = 0
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        _next_id += 1
        return _next_id


def _index_of(user_id: int) -> int | None:
    for i, user in enumerate(_users):
        if user.id == user_id:
            return i
    return None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationFailed(Exception):
    """A request body or path parameter failed validation."""


INVALID_USER_DATA = ValidationFailed("invalid user data")
INVALID_USER_NAME = ValidationFailed("invalid user name")
INVALID_USER_NICK = ValidationFailed("invalid user nickname")
INVALID_USER_ID = ValidationFailed("invalid user id")
USER_NOT_FOUND = {"message": "user was not found"}

_NAME = re.compile(r"^[a-zA-Z-]+$")


def validate_user(*, update: bool = False):
    """Build a middleware that checks the decoded user body."""

    def middleware(request: Request) -> ValidationFailed | None:
        user = request.body
        if not isinstance(user, dict):
            return INVALID_USER_DATA
        if not isinstance(user.get("name"), str) or not _NAME.match(user["name"]):
            return INVALID_USER_NAME
        if not isinstance(user.get("nick"), str) or not _NAME.match(user["nick"]):
            return INVALID_USER_NICK
        if update and not request.path_params.get("id", "").isdigit():
            return INVALID_USER_ID
        return None

    return middleware


def handle_validation_error(error: Any, request: Request) -> Any:
    if not isinstance(error, ValidationFailed):
        return error
    request.respond({"message": str(error)}, status=400)
    return None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@users.route("/users")
def list_users(request: Request):
    """List users, ``pageSize`` at a time."""
    page = request.query.get_int("page", 0) or 0
    page_size = request.query.get_int("pageSize", 10) or 10
    with _lock:
        window = _users[page * page_size : page * page_size + page_size]
    return [asdict(user) for user in window]


@users.route("/users", "POST")
def create_user(request: Request):
    user = User(id=_get_next_id(), name=request.body["name"], nick=request.body["nick"])
    with _lock:
        _users.append(user)
    return asdict(user), 201


@users.route(r"/users/(?<id>\d+)")
def get_user(id: int):
    with _lock:
        index = _index_of(id)
        if index is None:
            return USER_NOT_FOUND, 404
        return asdict(_users[index])


@users.route(r"/users/(?<id>\d+)", "PUT")
def update_user(id: int, request: Request):
    with _lock:
        index = _index_of(id)
        if index is None:
            return USER_NOT_FOUND, 404
        user = User(id=id, name=request.body["name"], nick=request.body["nick"])
        _users[index] = user
    return asdict(user)


@users.route(r"/users/(?<id>\d+)", "DELETE")
def delete_user(id: int):
    with _lock:
        index = _index_of(id)
        if index is None:
            return USER_NOT_FOUND, 404
        del _users[index]
    return None, 204


users.find("/users", "POST").use(validate_user()).use_for_error(handle_validation_error)
users.find(r"/users/(?<id>\d+)", "PUT").use(validate_user(update=True)).use_for_error(
    handle_validation_error
)

app.use_group(users)
