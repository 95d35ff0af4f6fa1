"""Route manifest — entries, module writer, and text recovery.

The manifest is a static module the client imports::

    export default {
      routes: [
        { pattern: '/users/:user', component: 'Users/Show', middleware: ['web', 'auth'], parameters: [{ name: 'user', required: true }] },
      ],
    };

At request time the written file is scraped (not re-resolved) for the
component and middleware names it mentions.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger("force10.generate")

BANNER = "// This file is generated by force10. Do not edit it by hand.\n"

_COMPONENT_RE = re.compile(r"component:\s*'((?:[^'\\]|\\.)+)'")
_MIDDLEWARE_RE = re.compile(r"middleware:\s*\[([^\]]*)\]")
_STRING_RE = re.compile(r"'((?:[^'\\]|\\.)*)'")
_ESCAPE_RE = re.compile(r"\\(.)")


@dataclass(frozen=True, slots=True)
class RouteParameter:
    """A ``{name}`` or ``{name?}`` placeholder in a route URI."""

    name: str
    required: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "required": self.required}


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One route in the manifest.

    Attributes:
        pattern: Client path pattern (``/users/:user``).
        component: Page component the route renders. Never empty.
        middleware: Unique middleware names, ``name:param`` allowed.
        parameters: URI placeholders in order.
        name: Route name. Informational; not written to the manifest.
    """

    pattern: str
    component: str
    middleware: tuple[str, ...] = ()
    parameters: tuple[RouteParameter, ...] = ()
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.component:
            msg = f"Manifest entry for {self.pattern!r} needs a component name"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """The four public fields, as written to the manifest."""
        return {
            "pattern": self.pattern,
            "component": self.component,
            "middleware": list(self.middleware),
            "parameters": [p.to_dict() for p in self.parameters],
        }


def _js_string(value: Any) -> str:
    text = str(value)
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def _js_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, dict):
        inner = ", ".join(f"{key}: {_js_value(item)}" for key, item in value.items())
        return f"{{ {inner} }}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_js_value(item) for item in value) + "]"
    return _js_string(value)


class ManifestWriter:
    """Serialize manifest entries to an importable TypeScript/JavaScript module."""

    __slots__ = ()

    def render(self, entries: Iterable[ManifestEntry]) -> str:
        lines = [BANNER, "export default {\n", "  routes: [\n"]
        lines.extend(f"    {_js_value(entry.to_dict())},\n" for entry in entries)
        lines.extend(["  ],\n", "};\n"])
        return "".join(lines)

    def write(self, entries: Iterable[ManifestEntry], path: str | Path) -> Path:
        """Write the module to *path*, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(entries), encoding="utf-8")
        logger.debug("Wrote manifest to %s", target)
        return target


def _unescape(value: str) -> str:
    return _ESCAPE_RE.sub(lambda m: {"n": "\n", "r": "\r"}.get(m.group(1), m.group(1)), value)


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def extract_components(text: str) -> list[str]:
    """Component names mentioned in manifest text, first-seen order."""
    return _unique(_unescape(m.group(1)) for m in _COMPONENT_RE.finditer(text))


def extract_middleware(text: str) -> list[str]:
    """Middleware names mentioned in manifest text, first-seen order."""
    names: list[str] = []
    for block in _MIDDLEWARE_RE.finditer(text):
        names.extend(_unescape(m.group(1)) for m in _STRING_RE.finditer(block.group(1)))
    return _unique(names)


def read_manifest(path: str | Path) -> str | None:
    """Return the written manifest's text, or ``None`` if it isn't there."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

