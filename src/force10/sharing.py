"""Request-scoped shared props via ContextVar.

Middleware shares data here; the host's page renderer merges it into the
props sent to the client. Each request should run inside
``shared_scope()`` so shared data never leaks between requests.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Reserved keys read by the client library
SERVER_KEY = "_force10_server"
PREFLIGHT_KEY = "_force10_preflight"

_shared_var: ContextVar[dict[str, Any] | None] = ContextVar("force10_shared", default=None)


def _store() -> dict[str, Any]:
    store = _shared_var.get()
    if store is None:
        store = {}
        _shared_var.set(store)
    return store


def share(key: str, value: Any) -> None:
    """Share *value* with the client under *key* for this request."""
    _store()[key] = value


def get_shared(key: str | None = None, default: Any = None) -> Any:
    """Return one shared value, or a copy of all of them when *key* is None."""
    store = _shared_var.get() or {}
    if key is None:
        return dict(store)
    return store.get(key, default)


def flush_shared() -> None:
    """Forget everything shared so far in this scope."""
    _store().clear()


@contextmanager
def shared_scope() -> Iterator[dict[str, Any]]:
    """Run a block with a fresh shared-props store.

    Usage::

        with shared_scope() as props:
            response = await next(request)
    """
    token = _shared_var.set({})
    try:
        yield _store()
    finally:
        _shared_var.reset(token)
