"""Request-time middleware — preflight state and cache invalidation hints.

Both middleware only *share* data with the client (see
``force10.sharing``); neither ever blocks or rewrites a request.
"""

from force10.middleware.cache_control import CacheControlMiddleware
from force10.middleware.preflight import PreflightMiddleware
from force10.middleware.protocol import Middleware, Next

__all__ = [
    "CacheControlMiddleware",
    "Middleware",
    "Next",
    "PreflightMiddleware",
]
