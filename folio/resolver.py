"""Path resolution for Folio.

This module maps logical page paths to files on disk and validates requests
for static files stored alongside pages.

A page at logical path ``a/b`` is stored either flat as ``{root}/a/b.{ext}`` or
standalone as ``{root}/a/b/page.{ext}``, where a standalone page directory
may also hold attachments and per-page assets.

Key classes:
- PathResolver: Finds the file backing a logical path.
- AttachmentResolver: Validates attachment requests inside page directories.
"""

from __future__ import annotations

from pathlib import Path

from .formats import PAGE_EXTENSIONS, PageFormat

# Basenames that are never served as attachments.
RESERVED_NAMES = frozenset(f"page.{ext}" for ext in PAGE_EXTENSIONS + ("sass",))


def _is_safe(path: str) -> bool:
    return ".." not in path.split("/")


class PathResolver:
    """Resolves logical paths to page files.

    Attributes:
        root: Page root directory.
    """

    def __init__(self, root: Path):
        """Initialize the path resolver.

        Args:
            root: Page root directory.
        """
        self.root = root

    def candidates(self, path: str) -> list[Path]:
        """List candidate filenames for a logical path, in lookup order.

        For each format, the flat file comes before the standalone
        ``page.{ext}`` file.
        """
        path = path.strip("/")
        files: list[Path] = []
        for fmt in PageFormat:
            files.append(self.root / f"{path}.{fmt.extension}")
            files.append(self.root / path / f"page.{fmt.extension}")
        return files

    def resolve(self, path: str) -> Path | None:
        """Find the file backing a logical path.

        Args:
            path: Logical page path.

        Returns:
            Path to the first existing candidate file, or None.
        """
        if not _is_safe(path):
            return None
        for candidate in self.candidates(path):
            if candidate.is_file():
                return candidate
        return None

    def exists(self, path: str) -> bool:
        return self.resolve(path) is not None

    def is_standalone(self, path: str) -> bool:
        """Check whether a logical path has a ``page.{ext}`` directory file."""
        if not _is_safe(path):
            return False
        directory = self.root / path.strip("/")
        return any((directory / f"page.{ext}").is_file() for ext in PAGE_EXTENSIONS)

    def standalone_asset(self, path: str, name: str) -> Path | None:
        """Return an asset stored beside a standalone page.

        Args:
            path: Logical page path.
            name: Asset filename, e.g. ``page.sass``.

        Returns:
            Path to the asset if the page is standalone and the asset exists.
        """
        if not self.is_standalone(path):
            return None
        asset = self.root / path.strip("/") / name
        return asset if asset.is_file() else None


class AttachmentResolver:
    """Validates requests for files stored in page directories.

    An attachment is any file in a standalone page's directory other than the
    page source files themselves.

    Attributes:
        root: Page root directory.
    """

    def __init__(self, root: Path):
        """Initialize the attachment resolver.

        Args:
            root: Page root directory.
        """
        self.root = root

    def find(self, attachment_path: str) -> Path | None:
        """Resolve an attachment request.

        Args:
            attachment_path: Path of the requested file relative to the page root.

        Returns:
            Path to the attachment, or None if the request is not a valid attachment.
        """
        if "\x00" in attachment_path:
            return None
        filename = self.root / attachment_path.strip("/")
        try:
            resolved = filename.resolve()
        except (OSError, ValueError):
            return None
        if not resolved.is_relative_to(self.root.resolve()):
            return None
        if not filename.is_file():
            return None
        if filename.name in RESERVED_NAMES:
            return None
        directory = filename.parent
        if not any((directory / f"page.{ext}").is_file() for ext in PAGE_EXTENSIONS):
            return None
        return filename
