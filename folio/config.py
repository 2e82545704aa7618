"""Site configuration for Folio.

Configuration is read from ``folio.yaml`` in the project root and merged over
DEFAULT_CONFIG. It tells the rest of the package where content lives.

Key items:
- SiteConfig: Resolved content and page directories.
- load_config: Load raw configuration values from folio.yaml.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "folio.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "content": "content",
    "pages": None,
    "strict": False,
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


@dataclass(frozen=True)
class SiteConfig:
    """Resolved locations of a site's content.

    Attributes:
        content_root: Directory holding site-wide files such as menu.txt.
        page_root: Directory holding page files and their attachments.
        strict: Whether full scans fail on the first broken page instead of
            skipping it.
    """

    content_root: Path
    page_root: Path
    strict: bool = False

    @classmethod
    def from_project(cls, project_root: Path) -> SiteConfig:
        """Build a SiteConfig from a project's folio.yaml.

        Relative directories are resolved against the project root. When no
        page directory is configured, pages live in ``{content}/pages``.
        """
        config = load_config(project_root)
        content_root = project_root / str(config["content"])
        pages = config.get("pages")
        page_root = project_root / str(pages) if pages else content_root / "pages"
        return cls(
            content_root=content_root,
            page_root=page_root,
            strict=bool(config.get("strict", False)),
        )

    def content_path(self, basename: str | None = None) -> Path:
        """Return the content root, or a file beneath it."""
        return self.content_root / basename if basename else self.content_root

    def page_path(self, basename: str | None = None) -> Path:
        """Return the page root, or a file beneath it."""
        return self.page_root / basename if basename else self.page_root
