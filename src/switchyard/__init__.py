"""Switchyard — an in-process request-dispatch engine.

Matches each request to a route by method and path pattern, runs it
through three ordered middleware tiers (app, group, route) with a
tier-local error-recovery chain, then calls the handler.

Basic usage::

    from switchyard import App, RouteGroup

    app = App()

    @app.route("/")
    def index():
        return {"message": "ok"}

    users = RouteGroup("users")

    @users.route("/users/{id:int}")
    def show(id: int):
        return {"id": id}

    app.use_group(users)

Serve it with any ASGI server (``uvicorn module:app``).
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "ErrorMiddleware",
    "HTTPError",
    "InvalidPatternError",
    "Middleware",
    "NotFound",
    "PathPattern",
    "PipelineError",
    "Request",
    "Response",
    "Route",
    "RouteGroup",
    "SwitchyardError",
    "UnrecoveredPipelineError",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    if name == "App":
        from switchyard.app import App

        return App

    if name == "AppConfig":
        from switchyard.config import AppConfig

        return AppConfig

    if name == "Request":
        from switchyard.http.request import Request

        return Request

    if name == "Response":
        from switchyard.http.response import Response

        return Response

    if name == "PathPattern":
        from switchyard.routing.pattern import PathPattern

        return PathPattern

    if name == "Route":
        from switchyard.routing.route import Route

        return Route

    if name == "RouteGroup":
        from switchyard.routing.group import RouteGroup

        return RouteGroup

    if name in ("ErrorMiddleware", "Middleware"):
        from switchyard.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "get_request":
        from switchyard.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InvalidPatternError",
        "NotFound",
        "PipelineError",
        "SwitchyardError",
        "UnrecoveredPipelineError",
    ):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
