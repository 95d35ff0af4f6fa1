"""Tests for the preflight evaluator — built-ins, registry, and keys."""

import threading
from dataclasses import dataclass
from pathlib import Path

import pytest

from force10.config import Force10Config, load_config
from force10.preflight import (
    PASSWORD_CONFIRMED_KEY,
    PreflightConfig,
    PreflightEvaluator,
    RequestContext,
    User,
    VerifiableUser,
)

NOW = 1_700_000_000.0


@dataclass
class FakeUser:
    id: str = "1"
    is_authenticated: bool = True
    email_verified: bool = True


@dataclass
class PlainUser:
    id: str = "2"
    is_authenticated: bool = True


def _evaluator(**config: object) -> PreflightEvaluator:
    return PreflightEvaluator(PreflightConfig(**config), clock=lambda: NOW)  # type: ignore[arg-type]


def _signed_in(**session: object) -> RequestContext:
    return RequestContext(users={"web": FakeUser()}, session=session)


class TestUserProtocols:
    def test_fake_user_satisfies_protocols(self) -> None:
        assert isinstance(FakeUser(), User)
        assert isinstance(FakeUser(), VerifiableUser)

    def test_plain_user_is_not_verifiable(self) -> None:
        assert isinstance(PlainUser(), User)
        assert not isinstance(PlainUser(), VerifiableUser)

    def test_unauthenticated_user_is_absent(self) -> None:
        context = RequestContext(users={"web": FakeUser(is_authenticated=False)})
        assert context.user("web") is None


class TestAuthAndGuest:
    def test_auth_passes_when_signed_in(self) -> None:
        assert _evaluator().evaluate(_signed_in(), ["auth"]) == {"auth": {"pass": True}}

    def test_auth_fails_when_signed_out(self) -> None:
        assert _evaluator().evaluate(RequestContext(), ["auth"]) == {"auth": {"pass": False}}

    def test_guest_is_inverse(self) -> None:
        evaluator = _evaluator()
        assert evaluator.evaluate(_signed_in(), ["guest"]) == {"guest": {"pass": False}}
        assert evaluator.evaluate(RequestContext(), ["guest"]) == {"guest": {"pass": True}}

    def test_parameterized_key_preserved(self) -> None:
        result = _evaluator().evaluate(_signed_in(), ["auth:sanctum"])
        assert result == {"auth:sanctum": {"pass": True}}

    def test_configured_guard_used(self) -> None:
        evaluator = _evaluator(guards=("web", "admin"))
        context = RequestContext(users={"web": FakeUser()})
        assert evaluator.evaluate(context, ["auth:admin"]) == {"auth:admin": {"pass": False}}

    def test_bare_and_parameterized_both_kept(self) -> None:
        result = _evaluator().evaluate(_signed_in(), ["auth", "auth:sanctum"])
        assert set(result) == {"auth", "auth:sanctum"}

    def test_resolve_guard(self) -> None:
        evaluator = _evaluator(guards=("web", "admin"), default_guard="web")
        assert evaluator.resolve_guard("admin") == "admin"
        assert evaluator.resolve_guard("sanctum") == "web"
        assert evaluator.resolve_guard(None) == "web"


class TestVerified:
    def test_verified_user(self) -> None:
        assert _evaluator().evaluate(_signed_in(), ["verified"]) == {"verified": {"pass": True}}

    def test_unverified_user(self) -> None:
        context = RequestContext(users={"web": FakeUser(email_verified=False)})
        assert _evaluator().evaluate(context, ["verified"]) == {"verified": {"pass": False}}

    def test_user_without_verification_flag(self) -> None:
        context = RequestContext(users={"web": PlainUser()})
        assert _evaluator().evaluate(context, ["verified"]) == {"verified": {"pass": False}}

    def test_signed_out(self) -> None:
        assert _evaluator().evaluate(RequestContext(), ["verified"]) == {
            "verified": {"pass": False}
        }


class TestPasswordConfirm:
    def test_recent_confirmation(self) -> None:
        confirmed_at = NOW - 60
        result = _evaluator().evaluate(
            _signed_in(**{PASSWORD_CONFIRMED_KEY: confirmed_at}), ["password.confirm"]
        )
        assert result == {
            "password.confirm": {"pass": True, "expiresAt": confirmed_at + 10800}
        }

    def test_expired_confirmation(self) -> None:
        confirmed_at = NOW - 20000
        result = _evaluator().evaluate(
            _signed_in(**{PASSWORD_CONFIRMED_KEY: confirmed_at}), ["password.confirm"]
        )
        assert result["password.confirm"]["pass"] is False
        assert result["password.confirm"]["expiresAt"] == confirmed_at + 10800

    def test_never_confirmed(self) -> None:
        result = _evaluator().evaluate(_signed_in(), ["password.confirm"])
        assert result == {"password.confirm": {"pass": False}}

    def test_custom_timeout(self) -> None:
        confirmed_at = NOW - 120
        result = _evaluator(password_timeout=60).evaluate(
            _signed_in(**{PASSWORD_CONFIRMED_KEY: confirmed_at}), ["password.confirm"]
        )
        assert result["password.confirm"] == {"pass": False, "expiresAt": confirmed_at + 60}

    def test_non_numeric_value(self) -> None:
        result = _evaluator().evaluate(
            _signed_in(**{PASSWORD_CONFIRMED_KEY: "yesterday"}), ["password.confirm"]
        )
        assert result == {"password.confirm": {"pass": False}}


class TestRegistry:
    def test_duplicates_collapse(self) -> None:
        result = _evaluator().evaluate(_signed_in(), ["auth", "auth", "auth"])
        assert list(result) == ["auth"]

    def test_order_independent(self) -> None:
        evaluator = _evaluator()
        forward = evaluator.evaluate(_signed_in(), ["auth", "guest", "auth"])
        backward = evaluator.evaluate(_signed_in(), ["guest", "auth", "guest"])
        assert forward == backward

    def test_unknown_middleware_omitted(self) -> None:
        result = _evaluator().evaluate(_signed_in(), ["auth", "throttle:60,1", "can:edit"])
        assert set(result) == {"auth"}

    def test_register_custom(self) -> None:
        evaluator = _evaluator()
        evaluator.register("subscribed", lambda ctx, plan: {"pass": plan == "pro"})
        result = evaluator.evaluate(_signed_in(), ["subscribed:pro", "subscribed:free"])
        assert result == {
            "subscribed:pro": {"pass": True},
            "subscribed:free": {"pass": False},
        }

    def test_register_replaces_builtin(self) -> None:
        evaluator = _evaluator()
        evaluator.register("auth", lambda ctx, guard: {"pass": "custom"})
        assert evaluator.evaluate(RequestContext(), ["auth"]) == {"auth": {"pass": "custom"}}

    def test_registries_are_per_instance(self) -> None:
        first = _evaluator()
        second = _evaluator()
        first.register("team", lambda ctx, param: {"pass": True})
        assert "team" in first.registered
        assert "team" not in second.registered

    def test_builtins_registered(self) -> None:
        assert _evaluator().registered == frozenset(
            {"auth", "guest", "verified", "password.confirm"}
        )

    def test_concurrent_registration(self) -> None:
        evaluator = _evaluator()

        def register(n: int) -> None:
            evaluator.register(f"custom{n}", lambda ctx, param: {"pass": True})

        threads = [threading.Thread(target=register, args=(n,)) for n in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        result = evaluator.evaluate(_signed_in(), [f"custom{n}" for n in range(20)])
        assert len(result) == 20


class TestFromConfig:
    def test_loaded_settings_reach_evaluator(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("FORCE10_PREFLIGHT", raising=False)
        (tmp_path / "pyproject.toml").write_text(
            "[tool.force10]\n"
            "password_timeout = 60\n"
            'guards = ["web", "admin"]\n'
            'default_guard = "admin"\n'
        )
        evaluator = PreflightEvaluator.from_config(load_config(tmp_path), clock=lambda: NOW)
        assert evaluator.config == PreflightConfig(
            guards=("web", "admin"), default_guard="admin", password_timeout=60
        )

        confirmed_at = NOW - 120
        result = evaluator.evaluate(
            _signed_in(**{PASSWORD_CONFIRMED_KEY: confirmed_at}), ["password.confirm"]
        )
        assert result["password.confirm"] == {"pass": False, "expiresAt": confirmed_at + 60}

    def test_default_guard_from_config(self) -> None:
        evaluator = PreflightEvaluator.from_config(
            Force10Config(guards=("web", "admin"), default_guard="admin")
        )
        context = RequestContext(users={"web": FakeUser()})
        assert evaluator.evaluate(context, ["auth"]) == {"auth": {"pass": False}}
        assert evaluator.evaluate(context, ["auth:web"]) == {"auth:web": {"pass": True}}
