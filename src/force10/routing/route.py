"""Route and action frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ClosureAction:
    """A route handled by a plain function or lambda."""

    func: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class ControllerAction:
    """A route handled by a controller class.

    ``controller`` is an import string (``"app.controllers.users:UsersController"``).
    ``method`` is ``None`` for invokable classes, which dispatch through
    ``__call__``.
    """

    controller: str
    method: str | None = None

    @property
    def method_name(self) -> str:
        """The method that handles the request."""
        return self.method or "__call__"

    @property
    def uses(self) -> str:
        """Stable identifier: ``"module:Class@method"`` or ``"module:Class"``."""
        if self.method is None:
            return self.controller
        return f"{self.controller}@{self.method}"


type RouteAction = ClosureAction | ControllerAction | None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``uri`` carries no leading slash (``"users/{user}"``) except for the
    root route, which is ``"/"``. ``middleware`` holds the names attached
    directly to the route, group middleware included.
    """

    uri: str
    methods: frozenset[str]
    action: RouteAction = None
    middleware: tuple[str, ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)
    name: str | None = None
