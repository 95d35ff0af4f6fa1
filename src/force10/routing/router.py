"""Route table with group support.

Routes are registered during setup and frozen with ``compile()``.
Groups contribute a URI prefix, middleware, and a name prefix to every
route registered inside them.
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from force10._internal.imports import import_object, import_string_for
from force10.errors import ConfigurationError
from force10.routing.route import ClosureAction, ControllerAction, Route, RouteAction

logger = logging.getLogger("force10.routing")

# Flask/Django-style placeholders — force10 expects {param}
_ANGLE_PARAM_RE = re.compile(r"<[^>]+>")


@runtime_checkable
class RouteSource(Protocol):
    """Anything the scanner can enumerate routes from."""

    @property
    def routes(self) -> list[Route]: ...

    def gather_middleware(self, route: Route) -> list[str]: ...


@dataclass(frozen=True, slots=True)
class _Group:
    prefix: str
    middleware: tuple[str, ...]
    name: str


def normalize_uri(uri: str) -> str:
    """Strip surrounding slashes. The root route stays ``"/"``.

    Examples::

        "/users/{user}/" -> "users/{user}"
        "/"              -> "/"
    """
    stripped = uri.strip("/")
    return stripped or "/"


def make_action(handler: Any) -> RouteAction:
    """Normalize a handler into a route action.

    Accepted shapes::

        lambda: ...                          -> ClosureAction
        UsersController                      -> ControllerAction (invokable)
        (UsersController, "index")           -> ControllerAction
        ("app.controllers:Users", "index")   -> ControllerAction
        "app.controllers:Users@index"        -> ControllerAction
        None                                 -> None
    """
    if handler is None:
        return None
    if isinstance(handler, (ClosureAction, ControllerAction)):
        return handler
    if isinstance(handler, tuple):
        if len(handler) != 2 or not isinstance(handler[1], str):
            msg = f"Controller tuple must be (controller, 'method'), got {handler!r}"
            raise ConfigurationError(msg)
        controller, method = handler
        if isinstance(controller, type):
            controller = import_string_for(controller)
        return ControllerAction(controller=str(controller), method=method)
    if isinstance(handler, str):
        controller, sep, method = handler.partition("@")
        return ControllerAction(controller=controller, method=method if sep else None)
    if isinstance(handler, type):
        return ControllerAction(controller=import_string_for(handler))
    if callable(handler):
        return ClosureAction(func=handler)
    msg = f"Unsupported route handler: {handler!r}"
    raise ConfigurationError(msg)


class Router:
    """Route table consumed by the scanner.

    Usage::

        router = Router()
        router.get("/", lambda: Inertia.render("Welcome"))
        router.page("/about", "About")

        with router.group(middleware=("web", "auth")):
            router.get("/users", (UsersController, "index"), name="users.index")
            router.get("/dashboard", ShowDashboard)

        router.compile()
    """

    __slots__ = ("_compiled", "_groups", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._groups: list[_Group] = []
        self._compiled = False

    # -- Registration -------------------------------------------------------

    def add(
        self,
        methods: Iterable[str],
        uri: str,
        handler: Any = None,
        *,
        name: str | None = None,
        middleware: Iterable[str] = (),
        defaults: Mapping[str, Any] | None = None,
    ) -> Route:
        """Register a route. Must be called before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        if _ANGLE_PARAM_RE.search(uri):
            msg = (
                f"Route {uri!r} uses <param> placeholders. "
                "force10 expects {param} or {param?} instead."
            )
            raise ConfigurationError(msg)

        prefix = "/".join(g.prefix.strip("/") for g in self._groups if g.prefix.strip("/"))
        full_uri = normalize_uri(f"{prefix}/{uri.strip('/')}" if prefix else uri)

        group_middleware = [mw for g in self._groups for mw in g.middleware]
        name_prefix = "".join(g.name for g in self._groups)

        route = Route(
            uri=full_uri,
            methods=frozenset(m.upper() for m in methods),
            action=make_action(handler),
            middleware=tuple(_unique([*group_middleware, *middleware])),
            defaults=dict(defaults or {}),
            name=f"{name_prefix}{name}" if name is not None else None,
        )
        self._routes.append(route)
        return route

    def get(self, uri: str, handler: Any = None, **kwargs: Any) -> Route:
        return self.add(("GET", "HEAD"), uri, handler, **kwargs)

    def post(self, uri: str, handler: Any = None, **kwargs: Any) -> Route:
        return self.add(("POST",), uri, handler, **kwargs)

    def put(self, uri: str, handler: Any = None, **kwargs: Any) -> Route:
        return self.add(("PUT",), uri, handler, **kwargs)

    def patch(self, uri: str, handler: Any = None, **kwargs: Any) -> Route:
        return self.add(("PATCH",), uri, handler, **kwargs)

    def delete(self, uri: str, handler: Any = None, **kwargs: Any) -> Route:
        return self.add(("DELETE",), uri, handler, **kwargs)

    def page(
        self,
        uri: str,
        component: str,
        props: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Route:
        """Register a GET route that renders *component* directly.

        The component name travels in the route defaults, so it resolves
        without inspecting any source.
        """
        defaults = {"component": component, "props": dict(props or {})}
        return self.add(("GET", "HEAD"), uri, None, defaults=defaults, **kwargs)

    @contextmanager
    def group(
        self,
        prefix: str = "",
        middleware: Iterable[str] = (),
        name: str = "",
    ) -> Iterator[Router]:
        """Apply a prefix, middleware, and name prefix to nested routes."""
        self._groups.append(_Group(prefix=prefix, middleware=tuple(middleware), name=name))
        try:
            yield self
        finally:
            self._groups.pop()

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    # -- Introspection ------------------------------------------------------

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes)

    def gather_middleware(self, route: Route) -> list[str]:
        """Return the route's middleware plus its controller's, deduplicated.

        Controllers may declare a class-level ``middleware`` sequence.
        A controller that cannot be imported contributes nothing.
        """
        return _unique([*route.middleware, *_controller_middleware(route.action)])


def _controller_middleware(action: RouteAction) -> tuple[str, ...]:
    if not isinstance(action, ControllerAction):
        return ()
    try:
        controller = import_object(action.controller)
    except (ImportError, AttributeError, ValueError) as exc:
        logger.debug("Could not import controller %s: %s", action.controller, exc)
        return ()
    if not inspect.isclass(controller):
        return ()
    declared = getattr(controller, "middleware", ())
    if isinstance(declared, str):
        return (declared,)
    if isinstance(declared, (list, tuple)):
        return tuple(str(mw) for mw in declared)
    return ()


def _unique(items: Iterable[str]) -> list[str]:
    """Deduplicate while keeping first-seen order."""
    return list(dict.fromkeys(items))
