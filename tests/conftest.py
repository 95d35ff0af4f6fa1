"""Shared fixtures for force10 tests."""

import importlib
import sys
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture
def write_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Callable[[str, str], Path]]:
    """Write an importable module (dotted names allowed) under ``tmp_path``.

    Modules written here are dropped from ``sys.modules`` afterwards so
    the next test can reuse the name.
    """
    monkeypatch.syspath_prepend(str(tmp_path))
    roots: set[str] = set()

    def _write(name: str, source: str) -> Path:
        parts = name.split(".")
        directory = tmp_path
        for part in parts[:-1]:
            directory = directory / part
            directory.mkdir(exist_ok=True)
            (directory / "__init__.py").touch()
        path = directory / f"{parts[-1]}.py"
        path.write_text(textwrap.dedent(source))
        roots.add(parts[0])
        importlib.invalidate_caches()
        return path

    yield _write

    for key in list(sys.modules):
        if key.split(".")[0] in roots:
            del sys.modules[key]
