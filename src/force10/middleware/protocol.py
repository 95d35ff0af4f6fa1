"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request, next: Next) -> Any: ...

No base class required. force10 never inspects the request or the
response; both belong to the host framework and pass through untouched.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

# The next handler in the host's middleware chain
type Next = Callable[[Any], Awaitable[Any]]


class Middleware(Protocol):
    """Protocol for force10 middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def share_locale(request, next: Next):
            share("locale", request.headers.get("accept-language", "en"))
            return await next(request)

        # Class middleware
        class CacheControlMiddleware:
            async def __call__(self, request, next: Next): ...
    """

    async def __call__(self, request: Any, next: Next) -> Any: ...
