"""
BeautifulSoup-based SEO metadata extraction for checked pages.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, ParserRejectedMarkup

from app.domain.url_check import PageMetadata
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

_DESCRIPTION_NAME = re.compile(r"^\s*description\s*$", flags=re.IGNORECASE)


def extract_page_metadata(markup: str | bytes) -> PageMetadata:
    """
    Return the first h1, the first title and the meta description.

    Missing elements yield None. Broken markup is parsed best-effort and a
    document the parser refuses outright yields empty metadata.
    """

    try:
        soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        log_event(logger, logging.WARNING, "page_metadata_parse_failed", error=str(exc))
        return PageMetadata()

    return PageMetadata(
        h1=_first_text(soup, "h1"),
        title=_first_text(soup, "title"),
        description=_meta_description(soup),
    )


def _first_text(soup: BeautifulSoup, tag_name: str) -> str | None:
    node = soup.find(tag_name)
    if node is None:
        return None
    return _clean_text(node.get_text())


def _meta_description(soup: BeautifulSoup) -> str | None:
    node = soup.find("meta", attrs={"name": _DESCRIPTION_NAME})
    if node is None:
        return None
    content = node.get("content")
    if content is None:
        return None
    if isinstance(content, list):
        content = " ".join(content)
    return _clean_text(content)


def _clean_text(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()
