"""Preflight — server-side middleware state shared with the client.

The client uses the result to predict whether an optimistic navigation
will be let through (e.g. skip it if password confirmation has expired).

Usage::

    from force10.preflight import PreflightEvaluator, RequestContext

    evaluator = PreflightEvaluator()
    evaluator.register("subscribed", lambda ctx, plan: {"pass": has_plan(ctx.user("web"), plan)})

    context = RequestContext(users={"web": user}, session=session)
    evaluator.evaluate(context, ["auth", "auth:sanctum", "password.confirm"])
    # {"auth": {"pass": True}, "auth:sanctum": {"pass": True},
    #  "password.confirm": {"pass": False}}

Register every evaluator during setup. ``register`` takes a lock, and
``evaluate`` works on a snapshot of the registry, so a late registration
never tears a running evaluation.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from force10.config import Force10Config

logger = logging.getLogger("force10.preflight")

# Session key holding the UNIX time of the last password confirmation
PASSWORD_CONFIRMED_KEY = "auth.password_confirmed_at"


# ---------------------------------------------------------------------------
# User protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class User(Protocol):
    """Minimal user protocol.

    Any object with ``id`` and ``is_authenticated`` satisfies this.
    """

    @property
    def id(self) -> str: ...

    @property
    def is_authenticated(self) -> bool: ...


@runtime_checkable
class VerifiableUser(User, Protocol):
    """A user whose email address may still need verification."""

    @property
    def email_verified(self) -> bool: ...


# ---------------------------------------------------------------------------
# Request context
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RequestContext:
    """What the evaluators can see of the current request.

    Attributes:
        request: The host framework's request object, passed through
            untouched for custom evaluators.
        users: Authenticated user per guard name. A guard with no entry
            has no authenticated user.
        session: Session data for the request.
    """

    request: Any = None
    users: Mapping[str, User] = field(default_factory=dict)
    session: Mapping[str, Any] = field(default_factory=dict)

    def user(self, guard: str) -> User | None:
        user = self.users.get(guard)
        if user is None or not user.is_authenticated:
            return None
        return user


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PreflightConfig:
    """Built-in evaluator settings.

    Attributes:
        guards: Guard names the app configures.
        default_guard: Guard used when none is named, or when the named
            guard is not configured.
        password_timeout: Seconds a password confirmation stays valid.
    """

    guards: tuple[str, ...] = ("web",)
    default_guard: str = "web"
    password_timeout: int = 10800

    @classmethod
    def from_config(cls, config: Force10Config) -> PreflightConfig:
        """Take the guard and timeout settings from a loaded ``Force10Config``."""
        return cls(
            guards=config.guards,
            default_guard=config.default_guard,
            password_timeout=config.password_timeout,
        )


type PreflightResult = dict[str, Any]
type Evaluator = Callable[[RequestContext, str | None], PreflightResult]


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class PreflightEvaluator:
    """Evaluate middleware names against a registry of predicates.

    The registry starts with ``auth``, ``guest``, ``verified``, and
    ``password.confirm``. It belongs to this instance; two evaluators
    never share registrations.
    """

    __slots__ = ("_clock", "_config", "_evaluators", "_lock")

    def __init__(
        self,
        config: PreflightConfig | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or PreflightConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._evaluators: dict[str, Evaluator] = {}

        self.register("auth", self._check_auth)
        self.register("guest", self._check_guest)
        self.register("verified", self._check_verified)
        self.register("password.confirm", self._check_password_confirmed)

    @classmethod
    def from_config(
        cls,
        config: Force10Config,
        *,
        clock: Callable[[], float] = time.time,
    ) -> PreflightEvaluator:
        """Build an evaluator from the project settings.

        Usage::

            evaluator = PreflightEvaluator.from_config(load_config())
        """
        return cls(PreflightConfig.from_config(config), clock=clock)

    @property
    def config(self) -> PreflightConfig:
        return self._config

    @property
    def registered(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._evaluators)

    def register(self, middleware: str, evaluator: Evaluator) -> None:
        """Bind *evaluator* to a middleware base name, replacing any earlier one."""
        with self._lock:
            self._evaluators[middleware] = evaluator

    def evaluate(
        self,
        context: RequestContext,
        middleware: Iterable[str],
    ) -> dict[str, PreflightResult]:
        """Evaluate each unique middleware string.

        ``"auth:sanctum"`` runs the ``auth`` evaluator with ``"sanctum"``
        and is stored under ``"auth:sanctum"``, so parameterized and bare
        forms coexist. Names without an evaluator are left out.
        """
        with self._lock:
            evaluators = dict(self._evaluators)

        results: dict[str, PreflightResult] = {}
        for entry in dict.fromkeys(middleware):
            name, sep, param = entry.partition(":")
            evaluator = evaluators.get(name)
            if evaluator is None:
                continue
            results[entry] = evaluator(context, param if sep else None)
        return results

    # -- Built-in evaluators ------------------------------------------------

    def resolve_guard(self, guard: str | None) -> str:
        """Return *guard* if configured, else the default guard."""
        if guard is not None and guard in self._config.guards:
            return guard
        return self._config.default_guard

    def _check_auth(self, context: RequestContext, guard: str | None) -> PreflightResult:
        return {"pass": context.user(self.resolve_guard(guard)) is not None}

    def _check_guest(self, context: RequestContext, guard: str | None) -> PreflightResult:
        return {"pass": context.user(self.resolve_guard(guard)) is None}

    def _check_verified(self, context: RequestContext, guard: str | None) -> PreflightResult:
        user = context.user(self.resolve_guard(guard))
        return {"pass": bool(user is not None and getattr(user, "email_verified", False))}

    def _check_password_confirmed(
        self, context: RequestContext, _param: str | None
    ) -> PreflightResult:
        confirmed_at = context.session.get(PASSWORD_CONFIRMED_KEY)
        if not confirmed_at:
            return {"pass": False}
        try:
            expires_at = confirmed_at + self._config.password_timeout
        except TypeError:
            logger.debug("Ignoring non-numeric %s: %r", PASSWORD_CONFIRMED_KEY, confirmed_at)
            return {"pass": False}
        return {"pass": self._clock() < expires_at, "expiresAt": expires_at}
