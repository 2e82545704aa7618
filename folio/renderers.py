"""Markup converters for Folio.

This module contains implementations of the MarkupConverter protocol, one per
page format, and the registry that maps each PageFormat to its converter.

Key classes:
- MarkdownConverter: Renders markdown to HTML with syntax highlighting.
- TextileConverter: Renders textile to HTML.
- HamlConverter: Renders haml to HTML.
- ConverterRegistry: Lookup table from PageFormat to converter.
"""

from __future__ import annotations

from pathlib import Path

import mistune
import textile

from .errors import RenderError
from .formats import PageFormat
from .protocols import MarkupConverter


class _HighlightRenderer(mistune.HTMLRenderer):
    """Markdown HTML renderer with Pygments syntax highlighting for code blocks."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'ruby').

        Returns:
            HTML string with highlighted code.
        """
        if info:
            from pygments import highlight
            from pygments.formatters import HtmlFormatter
            from pygments.lexers import get_lexer_by_name
            from pygments.util import ClassNotFound

            try:
                lexer = get_lexer_by_name(info.split()[0], stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{info}"' if info else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownConverter:
    """Renders markdown markup to HTML."""

    def render(self, markup: str) -> str:
        """Render markdown to HTML.

        Args:
            markup: Markdown source.

        Returns:
            Rendered HTML.
        """
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(),
            plugins=["strikethrough", "footnotes", "table", "url"],
        )
        return markdown(markup)


class TextileConverter:
    """Renders textile markup to HTML."""

    def render(self, markup: str) -> str:
        return textile.textile(markup)


class HamlConverter:
    """Renders haml markup to HTML.

    Haml support needs the optional ``django-hamlpy`` distribution, imported
    on first use so sites without haml pages do not need it installed.
    """

    def render(self, markup: str) -> str:
        from hamlpy.compiler import Compiler

        return Compiler().process(markup)


class ConverterRegistry:
    """Maps each PageFormat to the converter that renders it.

    Converters can be replaced per format, which keeps format dispatch in one
    lookup table instead of branching throughout the codebase.
    """

    def __init__(self, converters: dict[PageFormat, MarkupConverter] | None = None):
        """Initialize the registry.

        Args:
            converters: Optional mapping overriding the default converters.
        """
        self._converters: dict[PageFormat, MarkupConverter] = {
            PageFormat.MARKDOWN: MarkdownConverter(),
            PageFormat.HAML: HamlConverter(),
            PageFormat.TEXTILE: TextileConverter(),
        }
        if converters:
            self._converters.update(converters)

    def register(self, fmt: PageFormat, converter: MarkupConverter) -> None:
        """Register the converter for a format, replacing any previous one."""
        self._converters[fmt] = converter

    def get(self, fmt: PageFormat) -> MarkupConverter:
        return self._converters[fmt]

    def render(self, fmt: PageFormat, markup: str, filename: Path | None = None) -> str:
        """Render markup with the converter registered for a format.

        Args:
            fmt: Format of the markup.
            markup: Source markup.
            filename: Page file the markup came from, for error reporting.

        Returns:
            Rendered HTML.

        Raises:
            RenderError: If the converter fails.
        """
        converter = self.get(fmt)
        try:
            return converter.render(markup)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(filename, fmt.value, exc) from exc


# Default converter registry instance
default_converter_registry = ConverterRegistry()
