"""Scraper package — URL cleanup, page fetch & metadata extraction."""

from linkgrab.scraper.errors import (
    ClientError,
    ErrorKind,
    FetchTimeoutError,
    InvalidUrlError,
    ScraperError,
    ServerError,
    TransportError,
)
from linkgrab.scraper.extractor import extract_metadata
from linkgrab.scraper.fetcher import fetch_page
from linkgrab.scraper.models import FetchedPage, PageMetadata, ScrapedPage
from linkgrab.scraper.pipeline import grab_url
from linkgrab.scraper.urls import TRACKING_PARAMS, strip_tracking_params, validate_url

__all__ = [
    "grab_url",
    "validate_url",
    "strip_tracking_params",
    "fetch_page",
    "extract_metadata",
    "TRACKING_PARAMS",
    "ScrapedPage",
    "FetchedPage",
    "PageMetadata",
    "ErrorKind",
    "ScraperError",
    "InvalidUrlError",
    "ClientError",
    "ServerError",
    "FetchTimeoutError",
    "TransportError",
]
