"""Folio content repository.

This package provides a file-backed page repository for static sites and small CMS
engines. Pages are markdown, haml or textile files with an optional metadata header.

The main entry point is the PageCache, which resolves logical paths to files,
parses them into Page objects and keeps them cached until the files change.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
