"""``force10 generate`` — write the route manifest.

Reads ``[tool.force10]`` from the working directory's ``pyproject.toml``,
resolves the route source, and writes the manifest.
"""

import argparse
import sys

from force10.cli._resolve import resolve_source
from force10.config import load_config
from force10.errors import AppResolutionError
from force10.generate import generate


def run_generate(args: argparse.Namespace) -> None:
    """Generate the manifest for ``args.app``.

    Exits 1 when the route source cannot be resolved or the manifest
    cannot be written. A disabled config is not an error.
    """
    config = load_config()
    if not config.enabled:
        print("force10 is disabled; no manifest written.")
        return

    try:
        source = resolve_source(args.app)
    except AppResolutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        report = generate(source, config, output_path=args.path, verbose=args.verbose)
    except OSError as exc:
        print(f"Error: could not write manifest: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.verbose:
        for uri, component in report.included:
            print(f"  + {uri} -> {component}")
        for uri, reason in report.skipped:
            print(f"  - {uri} ({reason})")

    print(f"Wrote {len(report.entries)} routes to {report.path}")
