from __future__ import annotations

import pytest

from app.checks.html_parser import extract_page_metadata
from app.domain.url_check import PageMetadata


def test_extracts_first_h1_title_and_description() -> None:
    html = """
    <html>
      <head>
        <title> Example   Domain </title>
        <meta name="description" content="An example page">
      </head>
      <body><h1>Hello <b>world</b></h1><h1>Second</h1></body>
    </html>
    """

    metadata = extract_page_metadata(html)

    assert metadata == PageMetadata(
        h1="Hello world",
        title="Example Domain",
        description="An example page",
    )


def test_inline_tags_do_not_split_words() -> None:
    metadata = extract_page_metadata(
        "<h1>Hel<b>lo</b> W<i>orld</i></h1><title>Shop &ndash;\n  Home</title>"
    )

    assert metadata.h1 == "Hello World"
    assert metadata.title == "Shop – Home"


def test_fragment_without_head_or_body() -> None:
    metadata = extract_page_metadata("<h1>Oops</h1><title>Not Found</title>")

    assert metadata.h1 == "Oops"
    assert metadata.title == "Not Found"
    assert metadata.description is None


def test_missing_title_leaves_other_fields() -> None:
    html = '<meta name="description" content="desc"><h1>Heading</h1>'

    metadata = extract_page_metadata(html)

    assert metadata.title is None
    assert metadata.h1 == "Heading"
    assert metadata.description == "desc"


def test_description_name_is_case_insensitive_and_needs_content() -> None:
    assert extract_page_metadata('<meta name="Description" content="x">').description == "x"
    assert extract_page_metadata('<meta name="description">').description is None
    assert extract_page_metadata('<meta name="keywords" content="a,b">').description is None


@pytest.mark.parametrize(
    "markup",
    [
        "",
        b"",
        "plain text, not html at all",
        "<h1>unclosed <title>also unclosed",
        b"\xff\xfe<\x00h\x001\x00>",
    ],
)
def test_malformed_input_never_raises(markup: str | bytes) -> None:
    metadata = extract_page_metadata(markup)
    assert isinstance(metadata, PageMetadata)


def test_bytes_input_honours_meta_charset() -> None:
    html = '<meta charset="utf-8"><title>Проверка</title>'.encode("utf-8")

    assert extract_page_metadata(html).title == "Проверка"
