"""Switchyard exception hierarchy.

Shared across routing, the pipeline, middleware, and the ASGI adapter so
every module raises and catches the same types.
"""

from dataclasses import dataclass
from typing import Any


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when app setup is invalid.

    Always surfaces during registration, never while a request is running.
    """


class InvalidPatternError(ConfigurationError):
    """A route path could not be compiled."""

    def __init__(self, spec: object, reason: str) -> None:
        self.spec = spec
        self.reason = reason
        super().__init__(f"Invalid route pattern {spec!r}: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(SwitchyardError):
    """An error that maps directly to an HTTP status code.

    Middleware can return or raise one as its error value. When no
    error-middleware resolves it, the ASGI adapter answers with its
    status, detail, and headers.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 - conventional name in web frameworks
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class PipelineError(SwitchyardError):
    """Wraps a non-exception error value signalled by a middleware.

    Middleware may signal any non-``None`` value as an error. Exceptions
    travel through the error chain as-is; other values are only wrapped
    when they have to be raised out of the pipeline.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Middleware signalled error value {value!r}")


class UnrecoveredPipelineError(SwitchyardError):
    """An error value exhausted its tier's error-middleware chain.

    ``tier`` is one of ``"app"``, ``"group"``, ``"route"``; ``error`` is
    the last value the chain produced. The matched handler never ran.
    """

    def __init__(self, tier: str, error: Any) -> None:
        self.tier = tier
        self.error = error
        super().__init__(f"Unrecovered error in {tier} tier: {error!r}")
