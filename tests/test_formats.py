"""Tests for page formats and markup converters."""

from pathlib import Path

import pytest

from folio.errors import RenderError
from folio.formats import PAGE_EXTENSIONS, PageFormat
from folio.protocols import MarkupConverter
from folio.renderers import (
    ConverterRegistry,
    HamlConverter,
    MarkdownConverter,
    TextileConverter,
)

# --- Format Tests ---


def test_format_priority_and_lookup():
    assert PAGE_EXTENSIONS == ("mdown", "haml", "textile")
    assert PageFormat.from_path(Path("a/b.mdown")) is PageFormat.MARKDOWN
    assert PageFormat.from_path(Path("page.haml")) is PageFormat.HAML
    assert PageFormat.from_path(Path("x.textile")) is PageFormat.TEXTILE
    assert PageFormat.from_path(Path("image.png")) is None


def test_markdown_heading():
    markup = "Intro\n\n## Sub\n\n# Main Title  \n\nText"
    assert PageFormat.MARKDOWN.extract_heading(markup) == "Main Title"
    assert PageFormat.MARKDOWN.extract_heading("## Only sub") is None
    assert PageFormat.MARKDOWN.extract_heading("#Tight") == "Tight"


def test_haml_and_textile_headings():
    assert PageFormat.HAML.extract_heading("  %h1 Haml Title\n%p body") == "Haml Title"
    assert PageFormat.TEXTILE.extract_heading("h1. Textile Title\n\nbody") == "Textile Title"
    assert PageFormat.TEXTILE.extract_heading("h2. Not top level") is None


def test_strip_heading_removes_line_and_one_blank_line():
    markup = "# Title\n\n\nParagraph"
    assert PageFormat.MARKDOWN.strip_heading(markup) == "\nParagraph"
    assert PageFormat.MARKDOWN.strip_heading("# Title\nParagraph") == "Paragraph"
    assert PageFormat.MARKDOWN.strip_heading("No heading") == "No heading"
    assert PageFormat.TEXTILE.strip_heading("h1. T\n\np. x") == "p. x"


def test_summary_format():
    assert PageFormat.TEXTILE.summary_format is PageFormat.TEXTILE
    assert PageFormat.MARKDOWN.summary_format is PageFormat.MARKDOWN
    assert PageFormat.HAML.summary_format is PageFormat.MARKDOWN


# --- Converter Tests ---


def test_converters_satisfy_protocol():
    for converter in (MarkdownConverter(), TextileConverter(), HamlConverter()):
        assert isinstance(converter, MarkupConverter)


def test_markdown_converter():
    html = MarkdownConverter().render("Hello *world*.")
    assert "<p>Hello <em>world</em>.</p>" in html


def test_markdown_converter_highlights_code():
    html = MarkdownConverter().render("```python\nprint('hi')\n```\n")
    assert 'class="highlight"' in html

    plain = MarkdownConverter().render("```nosuchlanguage\na < b\n```\n")
    assert "a &lt; b" in plain


def test_textile_converter():
    html = TextileConverter().render("Some *bold* text")
    assert "<strong>bold</strong>" in html


def test_haml_converter():
    pytest.importorskip("hamlpy")
    html = HamlConverter().render("%p Hello")
    assert "<p>Hello</p>" in html


def test_registry_replaces_converter():
    class Upper:
        def render(self, markup: str) -> str:
            return markup.upper()

    registry = ConverterRegistry({PageFormat.HAML: Upper()})
    assert registry.render(PageFormat.HAML, "abc") == "ABC"
    registry.register(PageFormat.TEXTILE, Upper())
    assert registry.render(PageFormat.TEXTILE, "x") == "X"


def test_registry_wraps_converter_failures():
    class Broken:
        def render(self, markup: str) -> str:
            raise ValueError("bad markup")

    registry = ConverterRegistry({PageFormat.MARKDOWN: Broken()})
    with pytest.raises(RenderError) as excinfo:
        registry.render(PageFormat.MARKDOWN, "x", Path("a.mdown"))
    assert excinfo.value.format_name == "mdown"
    assert isinstance(excinfo.value.original_error, ValueError)
