"""Page cache for Folio.

The PageCache is the single owner of parsed Page objects. It maps logical paths
to the most recently loaded Page and re-parses a file when its modification
time moves past the cached copy's, or when the path now resolves to a
different file.

One cache is created per site and handed to whatever serves requests; a lock
guards the mapping so concurrent requests never see a half-replaced entry.

Key classes:
- PageCache: Loads, caches and enumerates pages.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from .config import SiteConfig
from .content import Page
from .errors import MetadataError, PageNotFoundError
from .formats import PAGE_EXTENSIONS
from .renderers import ConverterRegistry, default_converter_registry
from .resolver import AttachmentResolver, PathResolver
from .utils import logical_path

logger = logging.getLogger(__name__)

MENU_FILENAME = "menu.txt"


class PageCache:
    """Loads pages by logical path and keeps them until their files change.

    Attributes:
        config: Site configuration.
        converters: Converters handed to every loaded Page.
        resolver: Resolver for page files.
        attachments: Resolver for attachments in page directories.
        strict: Whether full scans re-raise page errors instead of skipping.
    """

    def __init__(
        self,
        config: SiteConfig,
        converters: ConverterRegistry | None = None,
        strict: bool | None = None,
    ):
        """Initialize the cache.

        Args:
            config: Site configuration supplying content and page roots.
            converters: Optional custom converter registry.
            strict: Overrides ``config.strict`` when given.
        """
        self.config = config
        self.converters = converters or default_converter_registry
        self.resolver = PathResolver(config.page_root)
        self.attachments = AttachmentResolver(config.page_root)
        self.strict = config.strict if strict is None else strict
        self._pages: dict[str, Page] = {}
        self._lock = threading.Lock()

    @property
    def page_root(self) -> Path:
        return self.config.page_root

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._pages

    def load(self, path: str) -> Page:
        """Return the page at a logical path, re-parsing it if its file changed.

        Args:
            path: Logical page path.

        Returns:
            The cached or freshly parsed Page.

        Raises:
            PageNotFoundError: If no page file exists for the path.
            MetadataError: If the page's metadata header is malformed.
        """
        path = path.strip("/")
        filename = self.resolver.resolve(path)
        if filename is None:
            raise PageNotFoundError(path, self.resolver.candidates(path))
        try:
            mtime = filename.stat().st_mtime
        except FileNotFoundError as exc:
            raise PageNotFoundError(path, [filename]) from exc

        with self._lock:
            cached = self._pages.get(path)
            if cached is not None and cached.filename == filename and mtime <= cached.mtime:
                return cached
            try:
                page = Page.from_file(
                    filename, self.page_root, cache=self, converters=self.converters
                )
            except PageNotFoundError as exc:
                raise PageNotFoundError(path, [filename]) from exc
            self._pages[path] = page
        logger.debug("Loaded %s from %s", path or "/", filename)
        return page

    def find_by_path(self, path: str) -> Page:
        return self.load(path)

    def purge(self) -> None:
        """Drop every cached page."""
        with self._lock:
            self._pages.clear()
        logger.debug("Purged page cache")

    def _page_files(self) -> list[Path]:
        if not self.page_root.is_dir():
            return []
        files: list[Path] = []
        for ext in PAGE_EXTENSIONS:
            files.extend(p for p in self.page_root.rglob(f"*.{ext}") if p.is_file())
        return sorted(files)

    def find_all(self) -> list[Page]:
        """Load every page under the page root.

        Every call rescans the page root; only the parsing of unchanged files
        is saved by the cache. Pages that fail to load are logged and skipped,
        unless the cache is strict.

        Returns:
            List of pages, ordered by filename.
        """
        pages: list[Page] = []
        seen: set[str] = set()
        for filename in self._page_files():
            path = logical_path(filename, self.page_root)
            if path in seen:
                continue
            seen.add(path)
            try:
                pages.append(self.load(path))
            except (MetadataError, PageNotFoundError) as exc:
                if self.strict:
                    raise
                logger.warning("Skipping page %s: %s", path or "/", exc)
        return pages

    def find_articles(self) -> list[Page]:
        """Return every page with a date, newest first.

        Pages with equal dates keep their find_all order.
        """
        dated = []
        for page in self.find_all():
            if not page.is_article:
                continue
            try:
                dated.append((page.date(), page))
            except MetadataError as exc:
                if self.strict:
                    raise
                logger.warning("Skipping article %s: %s", page.path, exc)
        dated.sort(key=lambda item: item[0], reverse=True)
        return [page for _, page in dated]

    def menu_items(self) -> list[Page]:
        """Load the pages listed in the site's menu.txt, in file order."""
        menu = self.config.content_path(MENU_FILENAME)
        if not menu.is_file():
            return []
        pages: list[Page] = []
        for line in menu.read_text(encoding="utf-8").splitlines():
            path = line.strip()
            if not path:
                continue
            try:
                pages.append(self.load(path))
            except (MetadataError, PageNotFoundError) as exc:
                if self.strict:
                    raise
                logger.warning("Skipping menu item %s: %s", path, exc)
        return pages
