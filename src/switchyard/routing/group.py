"""Route groups -- named collections of routes sharing a middleware tier.

A group keeps its routes in a dict keyed by ``(method, pattern source)``.
Re-registering an existing key replaces the route in place: the new
route keeps the original's position in the scan order (last write wins,
first insertion decides order).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from typing import TypeAlias

from switchyard._internal.types import Handler
from switchyard.routing.pattern import PathPattern
from switchyard.routing.route import Route
from switchyard.routing.scope import MiddlewareScope

PathSpec: TypeAlias = str | re.Pattern[str] | PathPattern


class RouteGroup(MiddlewareScope):
    """A collection of routes with its own group-tier middleware.

    Usage::

        users = RouteGroup("users")
        users.use(require_token)

        @users.route("/users/{id:int}")
        def show(id: int): ...

        app.use_group(users)

    Groups are shared by reference: the app holds the same object the
    author keeps, but only the app drives dispatch through it.
    """

    __slots__ = ("_routes", "legacy_query_match", "name")

    tier = "group"

    def __init__(self, name: str | None = None, *, legacy_query_match: bool = False) -> None:
        super().__init__()
        self.name = name
        self.legacy_query_match = legacy_query_match
        self._routes: dict[tuple[str, str], Route] = {}

    # -- Registration --

    def compile_pattern(self, path: PathSpec) -> PathPattern:
        """Compile *path* using this group's anchoring mode."""
        return PathPattern.compile(path, legacy=self.legacy_query_match)

    def register(self, path: PathSpec, method: str, handler: Handler) -> Route:
        """Create or replace the route at ``(method, path)``.

        Returns the route so per-route middleware can be chained onto it.
        Raises ``InvalidPatternError`` if *path* cannot be compiled.
        """
        self._check_not_frozen()
        route = Route(self.compile_pattern(path), method.upper(), handler)
        self._routes[route.key] = route
        return route

    def route(self, path: PathSpec, method: str = "GET") -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Use ``find()`` afterwards to attach per-route middleware.
        """

        def decorator(func: Handler) -> Handler:
            self.register(path, method, func)
            return func

        return decorator

    # -- Lookup --

    def find(self, path: PathSpec, method: str) -> Route | None:
        """Exact key lookup; ``None`` if nothing is registered at that key.

        This is not a match against request URLs -- *path* must be the
        same path value that was used at registration.
        """
        pattern = self.compile_pattern(path)
        return self._routes.get((method.upper(), pattern.source))

    def match(self, method: str, url: str) -> Route | None:
        """First route, in insertion order, whose method and pattern accept *url*."""
        for route in self._routes.values():
            if route.matches(method, url):
                return route
        return None

    @property
    def routes(self) -> list[Route]:
        """All routes in scan order."""
        return list(self._routes.values())

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def freeze(self) -> None:
        """Lock the group and every route in it."""
        super().freeze()
        for route in self._routes.values():
            route.freeze()

    def __repr__(self) -> str:
        label = self.name or "<unnamed>"
        return f"RouteGroup({label!r}, routes={len(self._routes)})"
