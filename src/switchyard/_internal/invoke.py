"""Invoke helpers — call sync or async callables uniformly.

Handlers, middleware, error-middleware, and lifecycle hooks can all be
``def`` or ``async def``. This module keeps the sync/async check in
exactly one place.

Usage::

    from switchyard._internal.invoke import invoke

    result = await invoke(middleware, request)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
