"""Route scanning — from the route table to manifest entries."""

import re
from collections.abc import Mapping, Sequence
from fnmatch import fnmatchcase
from typing import Any

from force10.config import RouteFilter
from force10.manifest import ManifestEntry, RouteParameter
from force10.resolution.resolver import ComponentResolver
from force10.routing.route import Route
from force10.routing.router import RouteSource

_OPTIONAL_PARAM_RE = re.compile(r"\{(\w+)\?\}")
_PARAM_RE = re.compile(r"\{(\w+)\}")
_ANY_PARAM_RE = re.compile(r"\{(\w+)(\?)?\}")

# JSON endpoints never render pages
API_GROUP = "api"


def get_route_pattern(uri: str) -> str:
    """Convert a route URI to a client pattern.

    Examples::

        "users/{user}"  -> "/users/:user"
        "users/{user?}" -> "/users/:user?"
    """
    # Optional placeholders first, or "{user?}" would never match below
    pattern = _OPTIONAL_PARAM_RE.sub(r":\1?", uri)
    pattern = _PARAM_RE.sub(r":\1", pattern)
    if not pattern.startswith("/"):
        pattern = "/" + pattern
    return pattern


def get_route_parameters(uri: str) -> list[RouteParameter]:
    """Placeholders in *uri*, left to right, with their optionality."""
    return [
        RouteParameter(name=match.group(1), required=match.group(2) != "?")
        for match in _ANY_PARAM_RE.finditer(uri)
    ]


class RouteScanner:
    """Enumerate page routes and assemble manifest entries.

    Usage::

        scanner = RouteScanner(router, ComponentResolver())
        entries = scanner.build_manifest(config.routes)
    """

    __slots__ = ("_resolver", "_source")

    def __init__(self, source: RouteSource, resolver: ComponentResolver) -> None:
        self._source = source
        self._resolver = resolver

    @property
    def resolver(self) -> ComponentResolver:
        return self._resolver

    def scan(self) -> list[Route]:
        """Every GET route outside the ``api`` middleware group."""
        return [
            route
            for route in self._source.routes
            if "GET" in route.methods and API_GROUP not in route.middleware
        ]

    def filter_by_config(
        self,
        routes: Sequence[Route],
        config: RouteFilter | Mapping[str, Any] | None,
    ) -> list[Route]:
        """Apply include/exclude globs to each route's raw URI.

        A route passes if ``include`` is empty or matches, and no
        ``exclude`` glob matches. Globs see the URI as registered
        (``users/{user}``), not the client pattern.
        """
        if not isinstance(config, RouteFilter):
            config = RouteFilter.from_mapping(config)
        include, exclude = config.include, config.exclude

        def allowed(route: Route) -> bool:
            uri = route.uri
            if include and not any(fnmatchcase(uri, pattern) for pattern in include):
                return False
            return not any(fnmatchcase(uri, pattern) for pattern in exclude)

        return [route for route in routes if allowed(route)]

    get_route_pattern = staticmethod(get_route_pattern)
    get_route_parameters = staticmethod(get_route_parameters)

    def get_middleware(self, route: Route) -> list[str]:
        return list(dict.fromkeys(self._source.gather_middleware(route)))

    def build_manifest(self, config: RouteFilter | Mapping[str, Any] | None = None) -> list[ManifestEntry]:
        """Scan, filter, and resolve. Routes without a component are dropped."""
        entries: list[ManifestEntry] = []
        for route in self.filter_by_config(self.scan(), config):
            component = self._resolver.resolve(route)
            if not component:
                continue
            entries.append(
                ManifestEntry(
                    pattern=get_route_pattern(route.uri),
                    component=component,
                    middleware=tuple(self.get_middleware(route)),
                    parameters=tuple(get_route_parameters(route.uri)),
                    name=route.name,
                )
            )
        return entries
