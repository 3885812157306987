"""Fetch-and-extract pipeline: URL in, :class:`ScrapedPage` out."""

from __future__ import annotations

from typing import Optional

import httpx
import structlog

from linkgrab.scraper.extractor import extract_metadata
from linkgrab.scraper.fetcher import fetch_page
from linkgrab.scraper.models import NO_TITLE, ScrapedPage
from linkgrab.scraper.urls import TRACKING_PARAMS, strip_tracking_params, validate_url

logger = structlog.get_logger(__name__)


def grab_url(
    url: str,
    timeout: float,
    user_agent: str,
    cleanup_tracking: bool,
    *,
    tracking_params: frozenset[str] = TRACKING_PARAMS,
    client: Optional[httpx.Client] = None,
) -> ScrapedPage:
    """Validate, clean, fetch and summarise *url*.

    Stages run in order and the first failure propagates unchanged as a
    :class:`~linkgrab.scraper.errors.ScraperError` subclass.  Extraction
    never fails: missing metadata just leaves fields empty.

    Args:
        url:              Raw URL supplied by the caller.
        timeout:          Seconds allowed for the whole HTTP request.
        user_agent:       Value of the ``User-Agent`` header.
        cleanup_tracking: Strip tracking query parameters before fetching.
        tracking_params:  Denylist used when *cleanup_tracking* is set.
        client:           Optional shared ``httpx.Client``.
    """
    validate_url(url)

    target = strip_tracking_params(url, tracking_params) if cleanup_tracking else url
    if target != url:
        logger.info("pipeline.tracking_stripped", original=url, cleaned=target)

    fetched = fetch_page(target, timeout, user_agent, client=client)
    meta = extract_metadata(fetched.html, base_url=fetched.final_url)

    page = ScrapedPage(
        title=meta.title or NO_TITLE,
        url=meta.url or target,
        description=meta.description,
        language=meta.language,
    )
    logger.info("pipeline.done", url=page.url, title=page.title)
    return page
