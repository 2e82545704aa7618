"""Metadata header parsing for Folio.

A page file may start with a block of ``Key: value`` lines followed by a blank
line. This module splits such a header from the markup that follows it.

Key functions:
- read_page_file: Read a page file with normalised line endings.
- is_metadata: Decide whether a block of text is a metadata header.
- parse_metadata: Split raw content into a metadata dict and markup.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .errors import MetadataError, PageNotFoundError

logger = logging.getLogger(__name__)

METADATA_LINE_RE = re.compile(r"^[\w ]+:")


def read_page_file(filename: Path) -> str:
    """Read a page file, normalising line endings to ``\\n``.

    Args:
        filename: Path to the page file.

    Returns:
        File contents.

    Raises:
        PageNotFoundError: If the file does not exist.
    """
    try:
        text = filename.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PageNotFoundError(str(filename), [filename]) from exc
    return text.replace("\r\n", "\n").replace("\r", "\n")


def is_metadata(block: str) -> bool:
    """Check whether the first line of a block looks like ``Key: value``."""
    first_line = block.split("\n", 1)[0]
    return METADATA_LINE_RE.match(first_line) is not None


def parse_metadata(text: str, filename: Path | None = None) -> tuple[dict[str, str], str]:
    """Split page content into metadata and markup.

    The content is split at the first blank line. If the block before it is a
    metadata header, each of its lines is parsed as ``key: value`` with the key
    lowercased; otherwise the whole content is markup.

    Args:
        text: Page content with ``\\n`` line endings.
        filename: Path to the page file, for error reporting.

    Returns:
        Tuple of (metadata dict, markup).

    Raises:
        MetadataError: If a header line has no colon.
    """
    first_block, _, remainder = text.partition("\n\n")
    if not is_metadata(first_block):
        return {}, text

    metadata: dict[str, str] = {}
    for line in first_block.rstrip("\n").split("\n"):
        key, colon, value = line.partition(":")
        if not colon:
            raise MetadataError(filename, f"metadata line has no colon: {line!r}")
        metadata[key.strip().lower()] = value.strip()
    logger.debug("Parsed %d metadata keys from %s", len(metadata), filename)
    return metadata, remainder
