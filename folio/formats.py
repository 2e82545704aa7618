"""Page formats supported by Folio.

Each format is identified by its file extension and knows how to find its own
top-level heading. Keeping the heading syntax here means no other module has to
branch on the format.

Key items:
- PageFormat: Closed enumeration of supported formats, in lookup priority order.
- PAGE_EXTENSIONS: Extensions of page files, in priority order.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

_HEADING_PATTERNS = {
    "mdown": re.compile(r"^#(?!#)[ \t]*(\S.*)$", re.MULTILINE),
    "haml": re.compile(r"^[ \t]*%h1[ \t]+(\S.*)$", re.MULTILINE),
    "textile": re.compile(r"^[ \t]*h1\.[ \t]+(\S.*)$", re.MULTILINE),
}


class PageFormat(Enum):
    """Markup formats a page file can be written in.

    Member order is the lookup priority used when a logical path could
    match files in more than one format.
    """

    MARKDOWN = "mdown"
    HAML = "haml"
    TEXTILE = "textile"

    @property
    def extension(self) -> str:
        """Return the file extension without the leading dot."""
        return self.value

    @property
    def summary_format(self) -> PageFormat:
        """Return the format summaries of this format are written in.

        Textile pages write summaries in textile; every other format uses markdown.
        """
        if self is PageFormat.TEXTILE:
            return PageFormat.TEXTILE
        return PageFormat.MARKDOWN

    @classmethod
    def from_path(cls, path: Path) -> PageFormat | None:
        """Return the format of a page file, or None for other files."""
        suffix = path.suffix.lstrip(".")
        for fmt in cls:
            if fmt.value == suffix:
                return fmt
        return None

    def extract_heading(self, markup: str) -> str | None:
        """Return the text of the first top-level heading in markup.

        Args:
            markup: Page markup in this format.

        Returns:
            The heading text, or None when the markup has no heading.
        """
        match = _HEADING_PATTERNS[self.value].search(markup)
        if match is None:
            return None
        return match.group(1).strip()

    def strip_heading(self, markup: str) -> str:
        """Remove the first heading line, and one blank line after it."""
        pattern = _HEADING_PATTERNS[self.value]
        match = pattern.search(markup)
        if match is None:
            return markup
        end = match.end()
        for _ in range(2):
            if markup.startswith("\n", end):
                end += 1
        return markup[: match.start()] + markup[end:]


PAGE_EXTENSIONS = tuple(fmt.extension for fmt in PageFormat)
