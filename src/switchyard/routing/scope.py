"""Middleware scopes shared by apps, route groups, and routes.

Each scope owns two ordered lists: middleware and error-middleware.
Both are append-only and de-duplicated by identity, so adding the same
callable twice is a no-op. Two equal-but-distinct callables are both kept.
"""

from collections.abc import Callable
from typing import Any, Self

from switchyard.middleware.protocol import ErrorMiddleware, Middleware


def _append_unique(items: list[Any], item: Any) -> None:
    if not any(existing is item for existing in items):
        items.append(item)


class MiddlewareScope:
    """Base for anything that carries a middleware tier.

    Mutable during setup; ``freeze()`` locks the lists once the owning
    app starts serving requests.
    """

    __slots__ = ("_error_middleware", "_frozen", "_middleware")

    tier: str = "scope"

    def __init__(self) -> None:
        self._middleware: list[Middleware] = []
        self._error_middleware: list[ErrorMiddleware] = []
        self._frozen: bool = False

    def use(self, middleware: Middleware | Callable[..., Any]) -> Self:
        """Append a middleware to this scope. Returns the scope for chaining."""
        self._check_not_frozen()
        _append_unique(self._middleware, middleware)
        return self

    def use_for_error(self, middleware: ErrorMiddleware | Callable[..., Any]) -> Self:
        """Append an error-middleware to this scope. Returns the scope for chaining."""
        self._check_not_frozen()
        _append_unique(self._error_middleware, middleware)
        return self

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Registered middleware, in execution order."""
        return tuple(self._middleware)

    @property
    def error_middleware(self) -> tuple[ErrorMiddleware, ...]:
        """Registered error-middleware, in execution order."""
        return tuple(self._error_middleware)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Lock this scope against further registration."""
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                f"Cannot modify this {self.tier} after the app has started serving "
                "requests. Register routes and middleware before the first request."
            )
            raise RuntimeError(msg)
