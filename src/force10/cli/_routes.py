"""``force10 routes`` — list page routes.

Resolves an import string to a route source and prints every page
route with its client pattern and resolved component.
"""

import argparse
import sys

from force10.cli._resolve import resolve_source
from force10.config import load_config
from force10.errors import AppResolutionError
from force10.resolution.resolver import ComponentResolver
from force10.scanner import RouteScanner, get_route_pattern


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATTERN, and COMPONENT.

    Routes whose component cannot be resolved show ``-``.
    """
    try:
        source = resolve_source(args.app)
    except AppResolutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    config = load_config()
    scanner = RouteScanner(source, ComponentResolver(config.app_path))
    routes = scanner.filter_by_config(scanner.scan(), config.routes)
    if not routes:
        print("No page routes registered.")
        return

    # Build rows: (methods_str, pattern, component)
    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods))
        component = scanner.resolver.resolve(route) or "-"
        rows.append((methods_str, get_route_pattern(route.uri), component))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "COMPONENT"))
    sep_len = max_methods + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, pattern, component in rows:
        print(fmt.format(methods_str, pattern, component))
