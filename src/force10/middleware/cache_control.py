"""Cache invalidation hints for the client's page cache.

Attach to routes that mutate data::

    app.add_middleware(CacheControlMiddleware("invalidate:/users/*", "invalidate:/dashboard"))

After the request, the client receives::

    {"_force10_server": {"invalidate": ["/users/*", "/dashboard"]}}

With no ``invalidate:`` directives nothing is shared at all.
"""

from __future__ import annotations

from typing import Any

from force10.middleware.protocol import Next
from force10.sharing import SERVER_KEY, share

_INVALIDATE = "invalidate:"


class CacheControlMiddleware:
    """Share ``invalidate:<pattern>`` directives with the client."""

    __slots__ = ("_invalidate",)

    def __init__(self, *directives: str) -> None:
        self._invalidate: tuple[str, ...] = tuple(
            d[len(_INVALIDATE):] for d in directives if d.startswith(_INVALIDATE)
        )

    @classmethod
    def from_parameters(cls, parameters: str) -> CacheControlMiddleware:
        """Build from a comma-separated alias string.

        ``"invalidate:/users/*,invalidate:/dashboard"`` yields the same
        middleware as passing both directives separately.
        """
        return cls(*(p.strip() for p in parameters.split(",") if p.strip()))

    @property
    def invalidate(self) -> tuple[str, ...]:
        return self._invalidate

    async def __call__(self, request: Any, next: Next) -> Any:
        if self._invalidate:
            share(SERVER_KEY, {"invalidate": list(self._invalidate)})
        return await next(request)
