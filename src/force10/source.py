"""Source text extraction — locate a method body without parsing.

Two declaration shapes are understood:

- brace-delimited (``function name(...) { ... }``): the body runs from
  the opening brace to its matching closing brace, found with a depth
  counter;
- indentation-delimited (``def name(...):``): the body is the rest of the
  declaration line plus every following line that is blank or indented
  deeper than the declaration.

Neither scanner knows about string or comment literals. A brace inside a
string desynchronizes the depth counter, and a column-zero line inside a
triple-quoted string ends an indented block early. Callers treat a wrong
or missing body as "no component", so these misses only drop a route.

All readers return ``None`` instead of raising.
"""

import linecache
import logging
import re
from pathlib import Path

logger = logging.getLogger("force10.resolution")


def _brace_declaration(keyword: str, name: str) -> re.Pattern[str]:
    # The first ")" ends the parameter list; parentheses are not nested-matched.
    return re.compile(
        rf"\b{keyword}\s+{re.escape(name)}\s*\([^)]*\)(?:\s*:\s*[^{{]+)?\s*\{{"
    )


def _indented_declaration(keyword: str, name: str) -> re.Pattern[str]:
    if keyword == "def":
        head = rf"(?:async[ \t]+)?def[ \t]+{re.escape(name)}[ \t]*\([^)]*\)(?:[ \t]*->[^:]+)?"
    else:
        head = rf"{keyword}[ \t]+{re.escape(name)}\b(?:[ \t]*\([^)]*\))?"
    return re.compile(rf"^(?P<indent>[ \t]*){head}[ \t]*:", re.MULTILINE)


def _match_braces(source: str, start: int) -> str:
    """Return the text from *start* up to the brace that closes depth 1."""
    depth = 1
    pos = start
    length = len(source)
    while pos < length:
        char = source[pos]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return source[start:pos]
        pos += 1
    # Unbalanced: best effort, take everything that is left
    return source[start:]


def _indent_width(line: str) -> int:
    return len(line.expandtabs(8)) - len(line.expandtabs(8).lstrip())


def _match_indentation(source: str, match: re.Match[str]) -> str:
    """Return the block opened by an indentation-style declaration."""
    decl_width = _indent_width(match.group("indent"))
    end_of_line = source.find("\n", match.end())
    if end_of_line == -1:
        return source[match.end():]

    # One-line body: ``def show(self): return inertia("Show")``
    inline = source[match.end():end_of_line]
    if inline.strip() and not inline.strip().startswith("#"):
        return inline

    body: list[str] = []
    for line in source[end_of_line + 1:].splitlines(keepends=True):
        if line.strip() and _indent_width(line) <= decl_width:
            break
        body.append(line)
    return "".join(body).rstrip()


def _extract_block(source: str, keyword: str, brace_keyword: str | None, name: str) -> str | None:
    indented = _indented_declaration(keyword, name).search(source)
    braced = _brace_declaration(brace_keyword, name).search(source) if brace_keyword else None

    if braced is not None and (indented is None or braced.start() < indented.start()):
        return _match_braces(source, braced.end())
    if indented is not None:
        return _match_indentation(source, indented)
    return None


def extract_method_body(source: str, method_name: str) -> str | None:
    """Return the body of the first declaration of *method_name*.

    Whichever declaration shape appears first in *source* wins. Returns
    ``None`` when no declaration is found.

    Examples::

        extract_method_body("function index() { return 1; }", "index")
        # -> " return 1; "

        extract_method_body("def index(self):\\n    return 1\\n", "index")
        # -> "    return 1"
    """
    return _extract_block(source, "def", "function", method_name)


def extract_class_body(source: str, class_name: str) -> str | None:
    """Return the body of the first ``class <class_name>`` declaration."""
    return _extract_block(source, "class", None, class_name)


def read_source(path: str | Path) -> str | None:
    """Read a whole source file, or ``None`` if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return None


def read_lines(path: str, start: int, end: int) -> str | None:
    """Read lines *start* through *end* (1-based, inclusive) of a file.

    Goes through ``linecache``, revalidated against the file on disk, so
    an edited file is never served stale. Returns ``None`` if the span is
    empty.
    """
    linecache.checkcache(path)
    lines = linecache.getlines(path)
    if not lines or start < 1 or end < start:
        return None
    return "".join(lines[start - 1:end]) or None
