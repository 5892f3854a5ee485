"""Switchyard application class.

Mutable during setup (route registration, groups, middleware).
Frozen at runtime when the first request, lifespan startup, or test
client arrives.
"""

import threading
from collections.abc import Callable

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler, Hook
from switchyard.config import AppConfig
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.pipeline import run_pipeline
from switchyard.routing.group import PathSpec, RouteGroup
from switchyard.routing.route import Route
from switchyard.routing.scope import MiddlewareScope
from switchyard.server.handler import handle_request


class App(MiddlewareScope):
    """The switchyard application: the dispatcher and the app tier.

    Holds an ordered list of route groups -- the first is the implicit
    default group that ``register()`` and ``route()`` write to -- and
    the application-wide middleware and error-middleware.

    Usage::

        app = App()
        app.use(JSONBodyParser())

        @app.route("/")
        def index():
            return {"message": "ok"}

        app.register("/echo", "POST", echo).use(validate_body)

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses
        a Lock + double-check so exactly one thread locks the registry,
        even if several ASGI workers deliver their first request at once.
    """

    __slots__ = (
        "_freeze_lock",
        "_groups",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    tier = "app"

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self.config: AppConfig = config or AppConfig()
        self._groups: list[RouteGroup] = [
            RouteGroup("default", legacy_query_match=self.config.legacy_query_match)
        ]
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Route registration --

    def register(self, path: PathSpec, method: str, handler: Handler) -> Route:
        """Create or replace a route in the default group.

        Returns the route so per-route middleware can be chained::

            app.register("/echo", "POST", echo).use(validate).use_for_error(reject)
        """
        self._check_not_frozen()
        return self.default_group.register(path, method, handler)

    def route(self, path: PathSpec, method: str = "GET") -> Callable[[Handler], Handler]:
        """Register a route handler in the default group via decorator."""

        def decorator(func: Handler) -> Handler:
            self.register(path, method, func)
            return func

        return decorator

    def find(self, path: PathSpec, method: str) -> Route | None:
        """Return the route registered at ``(method, path)`` in any group.

        Groups are searched in order; the first hit wins. Each group
        compiles *path* with its own anchoring mode.
        """
        for group in self._groups:
            route = group.find(path, method)
            if route is not None:
                return route
        return None

    # -- Groups --

    def use_group(self, group: RouteGroup) -> "App":
        """Append a route group. Adding the same group twice is a no-op."""
        self._check_not_frozen()
        if not any(existing is group for existing in self._groups):
            self._groups.append(group)
        return self

    @property
    def default_group(self) -> RouteGroup:
        """The implicit group that directly registered routes live in."""
        return self._groups[0]

    @property
    def groups(self) -> tuple[RouteGroup, ...]:
        """All groups, in scan order."""
        return tuple(self._groups)

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Response:
        """Run *request* through the pipeline and return its terminal response.

        Raises ``UnrecoveredPipelineError`` when a tier's error chain is
        exhausted without resolving the error. Exceptions raised by the
        handler itself propagate unchanged.
        """
        self._ensure_frozen()
        return await run_pipeline(request, app_scope=self, groups=self._groups)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(scope, receive, send, dispatch=self.dispatch, config=self.config)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Lock every scope against registration.

        MUST only be called while holding _freeze_lock.
        """
        for group in self._groups:
            group.freeze()
        self.freeze()
