"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, request_timeout=10.0)
    """

    debug: bool = False

    # Routing: reproduce the historical ``^PATH/?$|\?`` anchoring for the
    # default group (any URL with a query string matches the first route).
    legacy_query_match: bool = False

    # ASGI adapter
    request_timeout: float | None = None  # seconds; None = unbounded
    unrecovered_status: int = 500  # sent when an error chain is exhausted without a response

    def __post_init__(self) -> None:
        if self.request_timeout is not None and self.request_timeout <= 0:
            msg = f"request_timeout must be positive, got {self.request_timeout!r}"
            raise ValueError(msg)
        if not 100 <= self.unrecovered_status <= 599:
            msg = f"unrecovered_status must be an HTTP status code, got {self.unrecovered_status!r}"
            raise ValueError(msg)
