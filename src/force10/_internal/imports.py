"""Import-string helpers shared by the route table, resolver, and CLI."""

import importlib
from typing import Any


def import_object(import_string: str, default_attr: str | None = None) -> Any:
    """Resolve ``"package.module:attr"`` to the named object.

    Dotted attributes after the colon are followed (``"mod:Outer.Inner"``).
    When the colon is missing, ``default_attr`` names the attribute; with
    no default, the last dotted component is taken as the attribute.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist.
        ValueError: If the string names no attribute at all.
    """
    module_path, sep, attr_path = import_string.partition(":")
    if not sep:
        if default_attr is not None:
            attr_path = default_attr
        else:
            module_path, _, attr_path = import_string.rpartition(".")
    if not module_path or not attr_path:
        msg = f"Import string {import_string!r} must look like 'module:attribute'"
        raise ValueError(msg)

    obj: Any = importlib.import_module(module_path)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


def import_string_for(cls: type) -> str:
    """Return the ``"module:QualName"`` import string for a class."""
    return f"{cls.__module__}:{cls.__qualname__}"
