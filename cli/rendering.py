"""Utilities for rendering a scraped page in the CLI."""

from __future__ import annotations

import json
from enum import Enum

from linkgrab.scraper.models import ScrapedPage


class Style(str, Enum):
    full = "full"
    link = "link"


class OutputFormat(str, Enum):
    markdown = "markdown"
    json = "json"


def render_markdown(page: ScrapedPage, style: Style) -> str:
    """Render *page* as a markdown link.

    ``full`` renders a list item and, when the page has a description, a
    hard line break (``\\``) followed by the description.  ``link`` renders
    the bare link.
    """
    if style is Style.link:
        return f"[{page.title}]({page.url})"

    line = f"- [{page.title}]({page.url})"
    if page.description:
        return f"{line}\\\n{page.description}"
    return line


def render_page(page: ScrapedPage, style: Style, fmt: OutputFormat) -> str:
    """Render *page* for stdout.  *style* is ignored for JSON output."""
    if fmt is OutputFormat.json:
        return json.dumps(page.to_dict(), indent=2, ensure_ascii=False)
    return render_markdown(page, style)
