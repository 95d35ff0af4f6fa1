"""Manifest generation — route table in, manifest file out.

Used by ``force10 generate`` and callable directly from build scripts::

    from force10.config import load_config
    from force10.generate import generate

    report = generate(router, load_config())
    print(f"{len(report.entries)} routes written to {report.path}")
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from force10.config import Force10Config
from force10.manifest import ManifestEntry, ManifestWriter
from force10.resolution.resolver import ComponentResolver, diagnose_skip_reason
from force10.routing.router import RouteSource
from force10.scanner import RouteScanner

logger = logging.getLogger("force10.generate")

EXCLUDED_BY_FILTER = "Excluded by config filter"


@dataclass(frozen=True, slots=True)
class GenerationReport:
    """Outcome of one generation run.

    ``included`` and ``skipped`` are only filled in verbose mode.
    """

    path: Path
    entries: tuple[ManifestEntry, ...]
    included: tuple[tuple[str, str], ...] = ()
    skipped: tuple[tuple[str, str], ...] = ()


def generate(
    source: RouteSource,
    config: Force10Config,
    *,
    output_path: str | Path | None = None,
    verbose: bool = False,
) -> GenerationReport:
    """Scan *source*, resolve components, and write the manifest.

    The written manifest is the same with or without *verbose*; verbose
    only adds the per-route included/skipped breakdown to the report.
    """
    resolver = ComponentResolver(config.app_path)
    scanner = RouteScanner(source, resolver)
    entries = scanner.build_manifest(config.routes)

    path = ManifestWriter().write(entries, output_path or config.manifest_path)
    logger.info("Generated %d manifest entries at %s", len(entries), path)

    if not verbose:
        return GenerationReport(path=path, entries=tuple(entries))

    included: list[tuple[str, str]] = []
    skipped: list[tuple[str, str]] = []
    scanned = scanner.scan()
    kept = {id(route) for route in scanner.filter_by_config(scanned, config.routes)}
    for route in scanned:
        if id(route) not in kept:
            skipped.append((route.uri, EXCLUDED_BY_FILTER))
            continue
        component = resolver.resolve(route)
        if component:
            included.append((route.uri, component))
        else:
            skipped.append((route.uri, diagnose_skip_reason(route)))

    return GenerationReport(
        path=path,
        entries=tuple(entries),
        included=tuple(included),
        skipped=tuple(skipped),
    )
