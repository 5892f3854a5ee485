"""Route and RouteMatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from switchyard._internal.types import Handler
from switchyard.routing.pattern import PathPattern
from switchyard.routing.scope import MiddlewareScope

if TYPE_CHECKING:
    from switchyard.routing.group import RouteGroup


class Route(MiddlewareScope):
    """A single (method, pattern) -> handler binding.

    Identity is fixed at creation. The route's own middleware and
    error-middleware lists form the innermost tier of the pipeline::

        route = app.register("/echo", "POST", echo)
        route.use(validate_body).use_for_error(reject_invalid_body)
    """

    __slots__ = ("handler", "method", "pattern")

    tier = "route"

    def __init__(self, pattern: PathPattern, method: str, handler: Handler) -> None:
        super().__init__()
        self.pattern = pattern
        self.method = method
        self.handler = handler

    @property
    def key(self) -> tuple[str, str]:
        """Registration key: ``(method, pattern source)``."""
        return (self.method, self.pattern.source)

    def matches(self, method: str, url: str) -> bool:
        return method == self.method and self.pattern.matches(url)

    def __repr__(self) -> str:
        handler_name = getattr(self.handler, "__qualname__", repr(self.handler))
        return f"Route({self.method} {self.pattern.source!r} -> {handler_name})"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful lookup: the route and the group that owns it."""

    route: Route
    group: RouteGroup
    path_params: dict[str, str]
