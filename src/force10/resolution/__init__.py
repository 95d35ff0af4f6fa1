"""Component resolution — which page component does a route render?

Best-effort static analysis over route metadata and handler source.
A miss is never an error: the route is left out of the manifest.
"""

from force10.resolution.patterns import DEFAULT_PATTERN, RenderCallPattern
from force10.resolution.resolver import ComponentResolver, diagnose_skip_reason
from force10.resolution.strategies import (
    FORTIFY_VIEWS,
    AuthScaffoldingStrategy,
    ClosureStrategy,
    ControllerStrategy,
    ResolutionStrategy,
    RouteDefaultsStrategy,
)

__all__ = [
    "DEFAULT_PATTERN",
    "FORTIFY_VIEWS",
    "AuthScaffoldingStrategy",
    "ClosureStrategy",
    "ComponentResolver",
    "ControllerStrategy",
    "RenderCallPattern",
    "ResolutionStrategy",
    "RouteDefaultsStrategy",
    "diagnose_skip_reason",
]
