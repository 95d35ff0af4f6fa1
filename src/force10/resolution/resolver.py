"""Ordered component resolution.

The resolver holds a list of strategies and returns the first non-None
answer. Order is part of the contract: route defaults, closure source,
auth scaffolding registrations, controller source.
"""

from collections.abc import Iterable
from pathlib import Path

from force10.resolution.patterns import DEFAULT_PATTERN, RenderCallPattern
from force10.resolution.strategies import (
    AuthScaffoldingStrategy,
    ClosureStrategy,
    ControllerStrategy,
    ResolutionStrategy,
    RouteDefaultsStrategy,
)
from force10.routing.route import ClosureAction, ControllerAction, Route

# Conventional provider location, relative to the app package root
FORTIFY_PROVIDER = Path("providers") / "fortify_service_provider.py"


class ComponentResolver:
    """Infer the page component a route renders.

    Usage::

        resolver = ComponentResolver(app_path="app")
        resolver.resolve(route)  # "Users/Index" or None

    Custom strategies are inserted by priority::

        resolver = ComponentResolver(
            strategies=[MyStrategy(), *ComponentResolver.default_strategies("app")]
        )
    """

    __slots__ = ("_controllers", "_pattern", "_strategies")

    def __init__(
        self,
        app_path: str | Path = "app",
        *,
        pattern: RenderCallPattern = DEFAULT_PATTERN,
        strategies: Iterable[ResolutionStrategy] | None = None,
    ) -> None:
        self._pattern = pattern
        self._controllers = ControllerStrategy(pattern)
        if strategies is None:
            strategies = self.default_strategies(app_path, pattern, controllers=self._controllers)
        self._strategies: tuple[ResolutionStrategy, ...] = tuple(strategies)

    @staticmethod
    def default_strategies(
        app_path: str | Path = "app",
        pattern: RenderCallPattern = DEFAULT_PATTERN,
        *,
        controllers: ControllerStrategy | None = None,
    ) -> list[ResolutionStrategy]:
        """The built-in chain, in priority order."""
        return [
            RouteDefaultsStrategy(),
            ClosureStrategy(pattern),
            AuthScaffoldingStrategy(Path(app_path) / FORTIFY_PROVIDER, pattern=pattern),
            controllers or ControllerStrategy(pattern),
        ]

    @property
    def strategies(self) -> tuple[ResolutionStrategy, ...]:
        return self._strategies

    def resolve(self, route: Route) -> str | None:
        """Return the first component any strategy finds, else ``None``."""
        for strategy in self._strategies:
            component = strategy.resolve(route)
            if component is not None:
                return component
        return None

    def parse_controller_file(self, file_path: str | Path, method_name: str) -> str | None:
        """Return the component rendered by *method_name* in *file_path*."""
        return self._controllers.parse_controller_file(file_path, method_name)

    def parse_source(self, source: str) -> str | None:
        """Run the render-call search over arbitrary text."""
        return self._pattern.search(source)


def diagnose_skip_reason(route: Route, pattern: RenderCallPattern = DEFAULT_PATTERN) -> str:
    """Explain why a route produced no component.

    Only looks at the shape of the action; used for verbose reporting.
    """
    calls = f"{pattern.namespace}.render() or {pattern.helper}()"
    action = route.action
    if isinstance(action, ClosureAction):
        return f"No {calls} call found in closure"
    if action is None:
        return "No action defined"
    if not isinstance(action, ControllerAction):
        return "Unsupported action type"
    return f"No {calls} call found in controller method"
