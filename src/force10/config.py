"""force10 configuration.

Force10Config is a frozen dataclass: immutable after creation, no
string-key dict lookups at call sites. Projects usually keep their
settings in ``pyproject.toml``::

    [tool.force10]
    manifest_path = "resources/js/force10-manifest.ts"
    pages_directory = "resources/js/pages"

    [tool.force10.routes]
    exclude = ["admin*"]

Bad values never abort generation; the default is used instead.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger("force10.config")

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class RouteFilter:
    """Shell-style globs matched against raw route URIs.

    An empty ``include`` admits every route.
    """

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> RouteFilter:
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            include=_as_patterns(data.get("include")),
            exclude=_as_patterns(data.get("exclude")),
        )


def _as_patterns(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return ()


@dataclass(frozen=True, slots=True)
class Force10Config:
    """Manifest generation, preflight, and preload settings.

    All fields have sensible defaults. Override what you need::

        config = Force10Config(manifest_path="web/src/routes.ts")
    """

    enabled: bool = True

    # Where the generated manifest module is written
    manifest_path: str | Path = "resources/js/force10-manifest.ts"

    # Route filtering
    routes: RouteFilter = field(
        default_factory=lambda: RouteFilter(exclude=("telescope*", "horizon*", "_debugbar*"))
    )

    # Application package root (auth scaffolding provider lives under it)
    app_path: str | Path = "app"

    # Preflight
    preflight_enabled: bool = True
    guards: tuple[str, ...] = ("web",)
    default_guard: str = "web"
    password_timeout: int = 10800

    # Preloading
    pages_directory: str = "resources/js/pages"
    build_path: str = "build"
    public_path: str | Path = "public"
    asset_url: str = "/"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Force10Config:
        """Build a config from a plain mapping (e.g. a TOML table).

        Unknown keys are ignored. Values of the wrong type fall back to
        the field default.
        """
        defaults = cls()
        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            if f.name == "routes":
                values["routes"] = RouteFilter.from_mapping(raw)
                continue
            current = getattr(defaults, f.name)
            coerced = _coerce(raw, current)
            if coerced is None:
                logger.debug("Ignoring invalid value for %s: %r", f.name, raw)
                continue
            values[f.name] = coerced
        return cls(**values)


def _coerce(raw: Any, default: Any) -> Any:
    """Coerce *raw* to the type of *default*, or return None."""
    if isinstance(default, bool):
        return raw if isinstance(raw, bool) else None
    if isinstance(default, int):
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        return None
    if isinstance(default, tuple):
        if isinstance(raw, (list, tuple)) and all(isinstance(v, str) for v in raw):
            return tuple(raw)
        return None
    if isinstance(default, (str, Path)):
        return raw if isinstance(raw, (str, Path)) else None
    return raw


def _env_flag(name: str) -> bool | None:
    value = os.environ.get(name)
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return None


def load_config(root: str | Path = ".") -> Force10Config:
    """Load ``[tool.force10]`` from ``<root>/pyproject.toml``.

    A missing or unparseable file yields the defaults. The
    ``FORCE10_ENABLED`` and ``FORCE10_PREFLIGHT`` environment variables
    override the file.
    """
    data: dict[str, Any] = {}
    pyproject = Path(root) / "pyproject.toml"
    if pyproject.is_file():
        try:
            with pyproject.open("rb") as fh:
                document = tomllib.load(fh)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.debug("Could not read %s: %s", pyproject, exc)
        else:
            table = document.get("tool", {}).get("force10", {})
            if isinstance(table, dict):
                data = dict(table)

    enabled = _env_flag("FORCE10_ENABLED")
    if enabled is not None:
        data["enabled"] = enabled
    preflight = _env_flag("FORCE10_PREFLIGHT")
    if preflight is not None:
        data["preflight_enabled"] = preflight

    return Force10Config.from_mapping(data)
