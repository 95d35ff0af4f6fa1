"""Invoke helpers — call sync or async callables uniformly.

Preflight context factories can be ``def`` or ``async def``. Any code
that calls a user-provided factory must handle both cases; the check
lives here.

Usage::

    from force10._internal.invoke import invoke

    context = await invoke(factory, request)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
