"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

NO_TITLE = "No title"


@dataclass(frozen=True)
class FetchedPage:
    """The raw HTTP response for a single URL fetch."""

    requested_url: str
    final_url: str
    status_code: int
    html: str


@dataclass(frozen=True)
class PageMetadata:
    """Whatever metadata the extractor could find; every field may be absent."""

    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class ScrapedPage:
    """Summary of a fetched page, built once at the end of :func:`grab_url`."""

    title: str
    url: str
    description: Optional[str] = None
    language: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
