from pathlib import Path

import pytest

from folio.errors import MetadataError, PageNotFoundError
from folio.metadata import is_metadata, parse_metadata, read_page_file


def test_parse_metadata_header_and_body():
    text = "Date: 2021-03-01\nCategories: blog, news\n\n# Title\n\nBody text."
    metadata, markup = parse_metadata(text)
    assert metadata == {"date": "2021-03-01", "categories": "blog, news"}
    assert markup == "# Title\n\nBody text."


def test_keys_are_lowercased_and_values_trimmed():
    text = "Read More:   Keep going  \nATOM ID : tag:example.com,2021:1\n\nBody"
    metadata, _ = parse_metadata(text)
    assert metadata["read more"] == "Keep going"
    # Only the first colon separates key from value
    assert metadata["atom id"] == "tag:example.com,2021:1"


def test_content_without_header_is_all_markup():
    text = "# Just a heading\n\nSome text: with a colon.\n\nMore."
    metadata, markup = parse_metadata(text)
    assert metadata == {}
    assert markup == text


def test_single_block_without_blank_line():
    metadata, markup = parse_metadata("No header here")
    assert metadata == {}
    assert markup == "No header here"

    metadata, markup = parse_metadata("Title: Only a header\n")
    assert metadata == {"title": "Only a header"}
    assert markup == ""


def test_empty_content():
    assert parse_metadata("") == ({}, "")


def test_header_line_without_colon_raises():
    with pytest.raises(MetadataError) as excinfo:
        parse_metadata("Date: 2021-01-01\nnot a pair\n\nBody", Path("bad.mdown"))
    assert excinfo.value.filename == Path("bad.mdown")
    assert "not a pair" in str(excinfo.value)


def test_is_metadata_checks_first_line_only():
    assert is_metadata("Date: 2021\nwhatever")
    assert is_metadata("Some Key: value")
    assert not is_metadata("# Heading: with colon")
    assert not is_metadata("")


def test_read_page_file_normalises_line_endings(tmp_path):
    crlf = tmp_path / "crlf.mdown"
    crlf.write_bytes(b"Date: 2021-03-01\r\nSummary: Hi\r\n\r\n# Title\r\n\r\nBody\r\n")
    lf = tmp_path / "lf.mdown"
    lf.write_bytes(b"Date: 2021-03-01\nSummary: Hi\n\n# Title\n\nBody\n")

    assert read_page_file(crlf) == read_page_file(lf)
    assert parse_metadata(read_page_file(crlf)) == parse_metadata(read_page_file(lf))


def test_read_missing_file_raises_not_found(tmp_path):
    with pytest.raises(PageNotFoundError):
        read_page_file(tmp_path / "missing.mdown")
