"""Page model for Folio.

This module defines the Page class, the parsed form of one page file. A Page
holds the metadata and markup read from disk and derives everything else
(heading, date, rendered body, categories, related pages) on demand.

Pages are immutable: when a file changes, the cache parses a new Page rather
than updating the old one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from .errors import ContentError, MetadataError, PageNotFoundError
from .formats import PageFormat
from .metadata import parse_metadata, read_page_file
from .renderers import ConverterRegistry, default_converter_registry
from .utils import (
    format_date,
    is_standalone_file,
    logical_path,
    parent_path,
    parse_date,
    split_paths,
    unescape_newlines,
)

if TYPE_CHECKING:
    from .cache import PageCache

logger = logging.getLogger(__name__)

DEFAULT_READ_MORE = "Continue reading"


def _heading_key(page: Page) -> str:
    return (page.heading or "").lower()


@dataclass(frozen=True, eq=False)
class Page:
    """A parsed page file.

    Attributes:
        filename: Path to the backing file.
        root: Page root the file was loaded from.
        format: Markup format of the file.
        metadata: Header values keyed by lowercase name.
        markup: Page body with the metadata header removed.
        mtime: Modification time of the file when it was read.
        cache: Cache used to look up related pages.
        converters: Converters used to render markup.
    """

    filename: Path
    root: Path
    format: PageFormat
    metadata: Mapping[str, str]
    markup: str
    mtime: float
    cache: PageCache | None = field(default=None, repr=False)
    converters: ConverterRegistry = field(default=default_converter_registry, repr=False)

    @classmethod
    def from_file(
        cls,
        filename: Path,
        root: Path,
        cache: PageCache | None = None,
        converters: ConverterRegistry | None = None,
    ) -> Page:
        """Read and parse a page file.

        Args:
            filename: Path to the page file.
            root: Page root directory.
            cache: Cache used to resolve related pages.
            converters: Converters used to render markup.

        Returns:
            New Page instance.

        Raises:
            PageNotFoundError: If the file does not exist.
            MetadataError: If the metadata header is malformed.
        """
        fmt = PageFormat.from_path(filename)
        if fmt is None:
            raise ContentError(f"{filename}: not a page file")
        try:
            mtime = filename.stat().st_mtime
        except FileNotFoundError as exc:
            raise PageNotFoundError(str(filename), [filename]) from exc
        metadata, markup = parse_metadata(read_page_file(filename), filename)
        return cls(
            filename=filename,
            root=root,
            format=fmt,
            metadata=MappingProxyType(metadata),
            markup=markup,
            mtime=mtime,
            cache=cache,
            converters=converters or default_converter_registry,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def standalone(self) -> bool:
        """Whether the page is stored as ``{path}/page.{ext}``."""
        return is_standalone_file(self.filename)

    @property
    def permalink(self) -> str:
        """Last URL segment of the page."""
        if self.standalone:
            return self.filename.parent.name
        return self.filename.stem

    @property
    def path(self) -> str:
        return logical_path(self.filename, self.root)

    @property
    def abspath(self) -> str:
        return f"/{self.path}"

    @property
    def last_modified(self) -> datetime:
        return datetime.fromtimestamp(self.mtime, tz=timezone.utc)

    @property
    def description(self) -> str | None:
        return self.metadata.get("description")

    @property
    def keywords(self) -> str | None:
        return self.metadata.get("keywords")

    @property
    def atom_id(self) -> str | None:
        return self.metadata.get("atom id")

    @property
    def read_more(self) -> str:
        """Link text for "read the rest" links, from ``Read more`` metadata."""
        return self.metadata.get("read more") or DEFAULT_READ_MORE

    @property
    def is_article(self) -> bool:
        """Whether the page has a date and so counts as an article."""
        return bool(self.metadata.get("date", "").strip())

    @cached_property
    def _parsed_date(self) -> datetime | None:
        if not self.is_article:
            return None
        try:
            return parse_date(self.metadata["date"])
        except (ValueError, OverflowError) as exc:
            raise MetadataError(
                self.filename, f"invalid date {self.metadata['date']!r}: {exc}"
            ) from exc

    def date(self, fmt: str | None = None) -> datetime | str | None:
        """Return the page's date.

        Args:
            fmt: Optional output format. "xmlschema" gives an RFC 3339
                timestamp; any other value is used as a strftime format.

        Returns:
            None for pages without a date, a formatted string when fmt is
            given, otherwise a timezone-aware datetime.

        Raises:
            MetadataError: If the date cannot be parsed.
        """
        parsed = self._parsed_date
        if parsed is None or fmt is None:
            return parsed
        return format_date(parsed, fmt)

    @cached_property
    def heading(self) -> str | None:
        return self.format.extract_heading(self.markup)

    @property
    def summary(self) -> str | None:
        """Rendered ``Summary`` metadata, or None when the page has none."""
        text = self.metadata.get("summary")
        if text is None:
            return None
        return self.converters.render(
            self.format.summary_format, unescape_newlines(text), self.filename
        )

    @property
    def body(self) -> str:
        """Rendered markup without the top-level heading."""
        return self.converters.render(
            self.format, self.format.strip_heading(self.markup), self.filename
        )

    def to_html(self) -> str:
        """Render the whole markup, heading included."""
        return self.converters.render(self.format, self.markup, self.filename)

    def _require_cache(self) -> PageCache:
        if self.cache is None:
            raise ContentError(f"{self.filename}: page is not attached to a cache")
        return self.cache

    @property
    def categories(self) -> list[Page]:
        """Pages listed in ``Categories`` metadata that exist, sorted by heading.

        Category pages that fail to load are logged and left out, unless the
        cache is strict.
        """
        cache = self._require_cache()
        found: list[Page] = []
        for path in split_paths(self.metadata.get("categories")):
            if not cache.resolver.exists(path):
                continue
            try:
                found.append(cache.load(path))
            except (MetadataError, PageNotFoundError) as exc:
                if cache.strict:
                    raise
                logger.warning("Skipping category %s of %s: %s", path, self.path, exc)
        return sorted(found, key=_heading_key)

    @property
    def parent(self) -> Page | None:
        """The page one directory level up, if there is one."""
        cache = self._require_cache()
        path = parent_path(self.path)
        if path is None or not cache.resolver.exists(path):
            return None
        return cache.load(path)

    @property
    def pages(self) -> list[Page]:
        """Non-article pages that list this page as a category."""
        cache = self._require_cache()
        children = [
            page
            for page in cache.find_all()
            if not page.is_article and self in page.categories
        ]
        return sorted(children, key=_heading_key)

    @property
    def articles(self) -> list[Page]:
        """Articles that list this page as a category, newest first."""
        cache = self._require_cache()
        return [article for article in cache.find_articles() if self in article.categories]

    def _standalone_asset_url(self, source: str, target: str) -> str | None:
        if not self.standalone:
            return None
        if not (self.filename.parent / source).is_file():
            return None
        return f"{self.abspath.rstrip('/')}/{target}"

    @property
    def stylesheet(self) -> str | None:
        """URL of the page's stylesheet, when a ``page.sass`` sits beside it."""
        return self._standalone_asset_url("page.sass", "page.css")

    @property
    def javascript(self) -> str | None:
        """URL of the page's script, when a ``page.js`` sits beside it."""
        return self._standalone_asset_url("page.js", "page.js")
