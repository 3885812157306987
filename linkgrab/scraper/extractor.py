"""Metadata extraction: turns fetched HTML into a :class:`PageMetadata`."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from linkgrab.scraper.models import PageMetadata

_DESCRIPTION_NAME = re.compile(r"^\s*description\s*$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _attr(tag: Optional[Tag], name: str) -> Optional[str]:
    """Return the stripped value of attribute *name*, or ``None`` if blank."""
    if tag is None:
        return None
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if not value:
        return None
    return value.strip() or None


def _extract_title(soup: BeautifulSoup) -> Optional[str]:
    """Return the whitespace-collapsed text of the first ``<title>``."""
    tag = soup.find("title")
    if tag is None:
        return None
    return " ".join(tag.get_text().split()) or None


def _extract_description(soup: BeautifulSoup) -> Optional[str]:
    return _attr(soup.find("meta", attrs={"name": _DESCRIPTION_NAME}), "content")


def _extract_language(soup: BeautifulSoup) -> Optional[str]:
    return _attr(soup.find("html"), "lang")


def _extract_declared_url(soup: BeautifulSoup, base_url: Optional[str]) -> Optional[str]:
    """Return the page's canonical link, falling back to ``<base href>``.

    Relative values are resolved against *base_url* when one is given.
    """
    href = _attr(soup.find("link", rel="canonical"), "href") or _attr(
        soup.find("base"), "href"
    )
    if href is None:
        return None
    if base_url:
        return urljoin(base_url, href)
    return href


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_metadata(html: str, base_url: Optional[str] = None) -> PageMetadata:
    """Extract title, description, language and declared URL from *html*.

    ``html.parser`` recovers from any markup, so malformed or non-HTML input
    produces a :class:`PageMetadata` with absent fields rather than an error.
    """
    soup = BeautifulSoup(html, "html.parser")
    return PageMetadata(
        title=_extract_title(soup),
        url=_extract_declared_url(soup, base_url),
        description=_extract_description(soup),
        language=_extract_language(soup),
    )
