"""force10 CLI — manifest generation and route inspection.

Entry point registered as ``force10`` in ``pyproject.toml``::

    [project.scripts]
    force10 = "force10.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``force10`` command."""
    parser = argparse.ArgumentParser(
        prog="force10",
        description="force10 — route manifests, preflight, and preloading for page apps.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- force10 generate -------------------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Write the route manifest")
    generate_parser.add_argument(
        "app",
        help="Import string (e.g. myapp.routes:router)",
    )
    generate_parser.add_argument(
        "--path",
        default=None,
        help="Output file (defaults to manifest_path from [tool.force10])",
    )
    generate_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="List included and skipped routes",
    )

    # -- force10 routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List page routes and their components")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp.routes:router)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "generate":
        from force10.cli._generate import run_generate

        run_generate(args)
    elif args.command == "routes":
        from force10.cli._routes import run_routes

        run_routes(args)
