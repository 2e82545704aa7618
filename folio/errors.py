"""Error types for Folio.

Callers such as a routing layer need to tell "no such page" apart from a broken
page, so each failure mode gets its own exception class.

Key classes:
- ContentError: Base class for all content errors.
- PageNotFoundError: No backing file exists for a logical path.
- MetadataError: A page's metadata header could not be parsed.
- RenderError: A markup converter failed on a page.
"""

from __future__ import annotations

from pathlib import Path


class ContentError(Exception):
    """Base class for errors raised while loading or rendering content."""


class PageNotFoundError(ContentError):
    """Error raised when a logical path has no backing page file.

    Attributes:
        path: The logical path that was requested.
        searched: Candidate filenames that were checked.
    """

    def __init__(self, path: str, searched: list[Path] | None = None):
        self.path = path
        self.searched = list(searched or [])
        super().__init__(f"Page not found: {path!r}")


class MetadataError(ContentError):
    """Error raised when a page's metadata cannot be parsed.

    Attributes:
        filename: Path to the page file, if known.
        message: Human-readable error message.
    """

    def __init__(self, filename: Path | None, message: str):
        self.filename = filename
        self.message = message
        prefix = f"{filename}: " if filename is not None else ""
        super().__init__(f"{prefix}{message}")


class RenderError(ContentError):
    """Error raised when a markup converter fails.

    Attributes:
        filename: Path to the page file being rendered.
        format_name: Name of the markup format.
        original_error: The exception raised by the converter.
    """

    def __init__(
        self,
        filename: Path | None,
        format_name: str,
        original_error: Exception | None = None,
    ):
        self.filename = filename
        self.format_name = format_name
        self.original_error = original_error
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"{filename}: failed to render {format_name}{detail}")
