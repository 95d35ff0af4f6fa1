"""Preload hints for page component chunks.

Cross-references the written route manifest with the build tool's asset
manifest and emits one ``<link rel="modulepreload">`` per component, so
the chunk for every page is in cache before the first client navigation.

Only works after a production build. Without an asset manifest (dev
server, fresh checkout) the output is empty.
"""

import json
import logging
from pathlib import Path
from typing import Any

from force10.config import Force10Config
from force10.manifest import extract_components, read_manifest

logger = logging.getLogger("force10.preload")

# Tried in order for each component; first hit wins
EXTENSIONS = ("tsx", "jsx", "ts", "js", "vue")


class PreloadTagGenerator:
    """Build modulepreload tags from the route and asset manifests.

    Usage::

        generator = PreloadTagGenerator(config)
        html = generator.generate()
    """

    __slots__ = ("_config",)

    def __init__(self, config: Force10Config | None = None) -> None:
        self._config = config or Force10Config()

    def generate(self) -> str:
        """Return the tags joined by newlines, or ``""`` if there are none."""
        assets = self.load_asset_manifest()
        if assets is None:
            return ""

        components = self.extract_components()
        if not components:
            return ""

        pages_dir = self._config.pages_directory.rstrip("/")
        tags: list[str] = []
        for component in components:
            for ext in EXTENSIONS:
                chunk = assets.get(f"{pages_dir}/{component}.{ext}")
                if isinstance(chunk, dict) and "file" in chunk:
                    href = self.asset_href(str(chunk["file"]))
                    tags.append(f'<link rel="modulepreload" href="{href}">')
                    break

        return "\n    ".join(tags)

    def asset_href(self, file: str) -> str:
        """Public URL of a built file."""
        base = self._config.asset_url.rstrip("/")
        build = self._config.build_path.strip("/")
        return f"{base}/{build}/{file.lstrip('/')}"

    def candidate_paths(self) -> list[Path]:
        """Asset manifest locations: the current one, then the legacy one."""
        build_dir = Path(self._config.public_path) / self._config.build_path
        return [build_dir / ".vite" / "manifest.json", build_dir / "manifest.json"]

    def load_asset_manifest(self) -> dict[str, Any] | None:
        """Return the first candidate that parses to a JSON object."""
        for path in self.candidate_paths():
            if not path.is_file():
                continue
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
                logger.debug("Unreadable asset manifest %s: %s", path, exc)
                continue
            if isinstance(data, dict):
                return data
        return None

    def extract_components(self) -> list[str]:
        """Component names from the written route manifest."""
        text = read_manifest(self._config.manifest_path)
        if text is None:
            return []
        return extract_components(text)
