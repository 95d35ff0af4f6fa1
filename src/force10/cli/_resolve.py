"""Route source resolution — ``"module:attribute"`` strings to route tables.

Shared by ``force10 generate`` and ``force10 routes``.
"""

from force10._internal.imports import import_object
from force10.errors import AppResolutionError
from force10.routing.router import RouteSource


def resolve_source(import_string: str) -> RouteSource:
    """Resolve an import string to something the scanner can read.

    Accepts ``"module:attribute"``; a bare ``"module"`` looks for
    ``router``. The attribute may be:

    - a route source (``routes`` plus ``gather_middleware``)
    - an object with a ``router`` attribute holding one (an app)
    - a factory returning either of the above

    Raises:
        AppResolutionError: If the module or attribute is missing, the
            factory fails, or nothing route-like comes out.
    """
    try:
        obj = import_object(import_string, default_attr="router")
    except (ImportError, AttributeError, ValueError) as exc:
        msg = f"Could not import {import_string!r}: {exc}"
        raise AppResolutionError(msg) from exc

    source = _as_source(obj)
    if source is not None:
        return source

    if callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory {import_string!r} raised an error: {exc}"
            raise AppResolutionError(msg) from exc
        source = _as_source(obj)
        if source is not None:
            return source

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a route source"
    raise AppResolutionError(msg)


def _as_source(obj: object) -> RouteSource | None:
    if isinstance(obj, type):
        return None
    if isinstance(obj, RouteSource):
        return obj
    router = getattr(obj, "router", None)
    if router is not None and not isinstance(router, type) and isinstance(router, RouteSource):
        return router
    return None
