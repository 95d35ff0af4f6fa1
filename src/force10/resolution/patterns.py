"""Render-call pattern search.

Finds the first component name passed as a string literal to a rendering
call. Only literals count: ``Inertia.render(component)`` or
``Inertia.render(f"{kind}/Index")`` never match.
"""

import re
from dataclasses import dataclass, field

# 'name' or "name" followed by "," (more arguments) or ")" (none)
_LITERAL = r"\(\s*['\"]([^'\"]+)['\"]\s*(?:,|\))"


@dataclass(frozen=True, slots=True)
class RenderCallPattern:
    """The rendering calls that name a page component.

    Attributes:
        namespace: Facade whose ``render`` method renders a page
            (``Inertia.render("Users/Index", {...})``).
        helper: Bare helper function (``inertia("Users/Index")``).
    """

    namespace: str = "Inertia"
    helper: str = "inertia"
    _render_re: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _helper_re: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_render_re", re.compile(rf"\b{re.escape(self.namespace)}\.render{_LITERAL}")
        )
        object.__setattr__(self, "_helper_re", re.compile(rf"\b{re.escape(self.helper)}{_LITERAL}"))

    def search(self, source: str) -> str | None:
        """Return the first literal component name in *source*.

        The facade form is tried before the helper form, so a facade call
        anywhere in the text wins over an earlier helper call.
        """
        match = self._render_re.search(source)
        if match is None:
            match = self._helper_re.search(source)
        return match.group(1) if match else None

    def registration(self, facade: str, method: str) -> re.Pattern[str]:
        """Pattern for a view registration such as ``Fortify.login_view(...)``.

        Anchors on the registration call, skips any text non-greedily, and
        captures the first facade render literal after it.
        """
        return re.compile(
            rf"{re.escape(facade)}\.{re.escape(method)}\s*\([\s\S]*?"
            rf"\b{re.escape(self.namespace)}\.render\(\s*['\"]([^'\"]+)['\"]"
        )


DEFAULT_PATTERN = RenderCallPattern()
