"""Component resolution strategies.

Each strategy answers one question — "does this route name its component
in a place I know how to read?" — and returns the name or ``None``.
Strategies never raise: import failures, missing files, and unreadable
source all mean "not here", and the resolver moves on.

Supported patterns::

    router.page("/about", "About")                      # route defaults
    router.get("/", lambda: Inertia.render("Welcome"))  # closure
    Fortify.login_view(lambda request: Inertia.render("auth/login"))
    class UsersController:                              # controller method
        def index(self, request):
            return Inertia.render("Users/Index", {"users": users})

Unsupported: dynamic names (``Inertia.render(component)``), components
returned from helper methods, and any render call after the first.
"""

import importlib.util
import inspect
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from force10._internal.imports import import_object
from force10.resolution.patterns import DEFAULT_PATTERN, RenderCallPattern
from force10.routing.route import ClosureAction, ControllerAction, Route
from force10.source import extract_class_body, extract_method_body, read_source

logger = logging.getLogger("force10.resolution")


@runtime_checkable
class ResolutionStrategy(Protocol):
    """One heuristic in the resolution chain."""

    def resolve(self, route: Route) -> str | None: ...


class RouteDefaultsStrategy:
    """Read ``defaults["component"]``, as set by ``Router.page()``.

    The value is trusted and returned verbatim.
    """

    __slots__ = ()

    def resolve(self, route: Route) -> str | None:
        return route.defaults.get("component")


class ClosureStrategy:
    """Search a closure handler's own source lines for a render call."""

    __slots__ = ("_pattern",)

    def __init__(self, pattern: RenderCallPattern = DEFAULT_PATTERN) -> None:
        self._pattern = pattern

    def resolve(self, route: Route) -> str | None:
        if not isinstance(route.action, ClosureAction):
            return None
        source = closure_source(route.action.func)
        if source is None:
            return None
        return self._pattern.search(source)


def closure_source(func: object) -> str | None:
    """Return the source block of *func*, decorators included.

    The block ends where the tokenizer says it does, so a call whose
    closing parenthesis sits on its own line is read in full. Builtins,
    C callables, and functions defined in an interactive session yield
    ``None``.
    """
    func = inspect.unwrap(func)  # type: ignore[arg-type]
    code = getattr(func, "__code__", None)
    if code is None or not code.co_filename or code.co_filename.startswith("<"):
        logger.debug("Closure %r has no source file", func)
        return None
    try:
        lines, _ = inspect.getsourcelines(func)
    except (OSError, TypeError) as exc:
        logger.debug("Could not read source of %r: %s", func, exc)
        return None
    return "".join(lines) or None


# Auth scaffolding controllers mapped to the provider method that
# registers their view.
FORTIFY_VIEWS: Mapping[str, str] = {
    "fortify.http.controllers:AuthenticatedSessionController@create": "login_view",
    "fortify.http.controllers:RegisteredUserController@create": "register_view",
    "fortify.http.controllers:PasswordResetLinkController@create": "request_password_reset_link_view",
    "fortify.http.controllers:NewPasswordController@create": "reset_password_view",
    "fortify.http.controllers:EmailVerificationPromptController": "verify_email_view",
    "fortify.http.controllers:ConfirmablePasswordController@show": "confirm_password_view",
    "fortify.http.controllers:TwoFactorAuthenticatedSessionController@create": "two_factor_challenge_view",
}


class AuthScaffoldingStrategy:
    """Resolve auth scaffolding routes through their view registrations.

    Scaffolding controllers don't render pages themselves; the app
    registers a view callback for each one in a service provider::

        Fortify.login_view(lambda request: Inertia.render("auth/login"))

    The strategy maps the route's controller to the registration method,
    then reads the provider file for the render call inside it. It is
    inert unless the scaffolding package is importable.
    """

    __slots__ = ("_facade", "_module", "_pattern", "_provider_path", "_views")

    def __init__(
        self,
        provider_path: str | Path,
        *,
        module: str = "fortify",
        facade: str = "Fortify",
        views: Mapping[str, str] = FORTIFY_VIEWS,
        pattern: RenderCallPattern = DEFAULT_PATTERN,
    ) -> None:
        self._provider_path = Path(provider_path)
        self._module = module
        self._facade = facade
        self._views = views
        self._pattern = pattern

    def is_available(self) -> bool:
        """Whether the scaffolding package is installed."""
        try:
            return importlib.util.find_spec(self._module) is not None
        except (ImportError, ValueError):
            return False

    def resolve(self, route: Route) -> str | None:
        if not isinstance(route.action, ControllerAction):
            return None
        view_method = self._views.get(route.action.uses)
        if view_method is None or not self.is_available():
            return None
        return self.parse_provider(view_method)

    def parse_provider(self, view_method: str) -> str | None:
        """Find the component registered through ``<facade>.<view_method>``."""
        content = read_source(self._provider_path)
        if content is None:
            return None
        match = self._pattern.registration(self._facade, view_method).search(content)
        return match.group(1) if match else None


class ControllerStrategy:
    """Search the handling controller method's body for a render call."""

    __slots__ = ("_pattern",)

    def __init__(self, pattern: RenderCallPattern = DEFAULT_PATTERN) -> None:
        self._pattern = pattern

    def resolve(self, route: Route) -> str | None:
        action = route.action
        if not isinstance(action, ControllerAction):
            return None

        try:
            controller = import_object(action.controller)
            file_path = inspect.getsourcefile(controller)
        except (ImportError, AttributeError, ValueError, TypeError) as exc:
            logger.debug("Could not locate controller %s: %s", action.controller, exc)
            return None
        if file_path is None:
            return None

        content = read_source(file_path)
        if content is None:
            return None
        scope = extract_class_body(content, getattr(controller, "__name__", "")) or content
        return self.parse_source(scope, action.method_name)

    def parse_source(self, content: str, method_name: str) -> str | None:
        body = extract_method_body(content, method_name)
        if body is None:
            return None
        return self._pattern.search(body)

    def parse_controller_file(self, file_path: str | Path, method_name: str) -> str | None:
        """Return the component rendered by *method_name* in *file_path*."""
        content = read_source(file_path)
        if content is None:
            return None
        return self.parse_source(content, method_name)
