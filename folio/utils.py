"""Utility functions for Folio.

Key functions:
    parse_date: Parse a metadata date value into an aware datetime.
    format_date: Format a datetime, with "xmlschema" meaning RFC 3339.
    logical_path: Derive a page's logical path from its filename.
    split_paths: Split a comma-separated metadata value into paths.
    unescape_newlines: Turn literal backslash-n sequences into newlines.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from dateutil import parser as dateutil_parser

from .formats import PageFormat

XMLSCHEMA = "xmlschema"


def parse_date(value: str) -> datetime:
    """Parse a date string from page metadata.

    Naive values are taken to be UTC so that every parsed date can be compared
    with every other.

    Args:
        value: Date string such as "2021-03-01" or "1 March 2021 10:00 +0100".

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If the value is empty or cannot be parsed.
        OverflowError: If the value is out of range.
    """
    raw = value.strip()
    if not raw:
        raise ValueError("empty date")
    parsed = dateutil_parser.parse(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value: datetime, fmt: str) -> str:
    """Format a datetime.

    Args:
        value: Datetime to format.
        fmt: "xmlschema" for an RFC 3339 timestamp, otherwise a strftime format.

    Returns:
        Formatted date string.

    Examples:
        >>> format_date(datetime(2021, 3, 1, tzinfo=timezone.utc), "xmlschema")
        '2021-03-01T00:00:00+00:00'
    """
    if fmt == XMLSCHEMA:
        return value.isoformat(timespec="seconds")
    return value.strftime(fmt)


def is_standalone_file(filename: Path) -> bool:
    """Check whether a page file uses the directory layout (``page.{ext}``)."""
    return filename.stem == "page" and PageFormat.from_path(filename) is not None


def logical_path(filename: Path, root: Path) -> str:
    """Derive the logical path of a page file.

    Args:
        filename: Path to the page file.
        root: Page root directory.

    Returns:
        Slash-separated logical path without a leading slash.

    Examples:
        >>> logical_path(Path("/site/blog/post.mdown"), Path("/site"))
        'blog/post'

        >>> logical_path(Path("/site/blog/page.mdown"), Path("/site"))
        'blog'
    """
    rel = filename.relative_to(root)
    if is_standalone_file(filename):
        parts = rel.parent.parts
    else:
        parts = rel.parent.parts + (rel.stem,)
    return "/".join(parts)


def parent_path(path: str) -> str | None:
    """Return the logical path one level up, or None at the top level."""
    if "/" not in path:
        return None
    return path.rsplit("/", 1)[0]


def split_paths(value: str | None) -> list[str]:
    """Split a comma-separated metadata value into trimmed, non-empty paths."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def unescape_newlines(text: str) -> str:
    """Replace literal ``\\n`` sequences with newline characters."""
    return text.replace("\\n", "\n")
