"""URL validation and tracking-parameter cleanup."""

from __future__ import annotations

import re
from urllib.parse import unquote_plus, urlsplit, urlunsplit

import httpx

from linkgrab.scraper.errors import InvalidUrlError

ALLOWED_SCHEMES: frozenset[str] = frozenset({"http", "https"})

# Characters a hostname may never contain: whitespace, controls, <>"
_FORBIDDEN_HOST_CHARS = re.compile(r'[\s\x00-\x1f\x7f<>"]')

# Query keys used purely for analytics / attribution.  Matching is
# case-sensitive: ``UTM_SOURCE`` is not the same key as ``utm_source``.
TRACKING_PARAMS: frozenset[str] = frozenset(
    {
        # Google Analytics & Ads
        "utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content",
        "gclid", "gclsrc", "dclid", "fbclid",
        # Social media
        "igshid", "twclid", "ttclid", "li_fat_id",
        # Email marketing
        "_hsenc", "_hsmi", "vero_conv", "vero_id",
        # Other common trackers
        "ref", "referrer", "source", "campaign", "medium",
        "msclkid", "mc_cid", "mc_eid", "pk_source", "pk_medium", "pk_campaign",
        # Amazon
        "tag", "linkCode", "creativeASIN", "linkId",
        # Generic
        "track", "tracking", "tracker", "affiliate", "aff", "sid",
    }
)


def validate_url(url: str) -> str:
    """Return *url* unchanged if it is an absolute ``http``/``https`` URL.

    Raises:
        InvalidUrlError: If *url* cannot be parsed, has no host, or uses any
            other scheme.  The message names the offending scheme or the
            parse failure.
    """

    def _malformed(reason: str) -> InvalidUrlError:
        return InvalidUrlError(f"Failed to parse URL '{url}': {reason}", url)

    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError as exc:
        raise _malformed(str(exc)) from exc

    if not parts.scheme:
        raise _malformed("relative URL without a base")
    if parts.scheme not in ALLOWED_SCHEMES:
        raise InvalidUrlError(
            f"Unsupported scheme '{parts.scheme}'. Only HTTP and HTTPS are supported",
            url,
        )
    if not parts.hostname:
        raise _malformed("empty host")
    if _FORBIDDEN_HOST_CHARS.search(parts.hostname):
        raise _malformed("invalid host character")

    # httpx is what sends the request; anything it refuses is malformed too.
    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise _malformed(str(exc)) from exc
    return url


def _query_key(segment: str) -> str:
    return unquote_plus(segment.partition("=")[0])


def strip_tracking_params(
    url: str, tracking_params: frozenset[str] = TRACKING_PARAMS
) -> str:
    """Return *url* with every query key listed in *tracking_params* removed.

    Only keys are decoded for matching; surviving ``key=value`` segments are
    kept verbatim and in order, and the fragment is untouched.  A URL without
    a ``?``, or with nothing to remove, is returned as is.  When the query
    ends up empty the ``?`` goes too.

    Raises:
        InvalidUrlError: If *url* cannot be parsed as an absolute URL.
    """
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidUrlError(
            f"Failed to parse URL for cleanup '{url}': {exc}", url
        ) from exc
    if not parts.scheme:
        raise InvalidUrlError(
            f"Failed to parse URL for cleanup '{url}': relative URL without a base",
            url,
        )

    if "?" not in url.partition("#")[0]:
        return url

    kept = [
        segment
        for segment in parts.query.split("&")
        if segment and _query_key(segment) not in tracking_params
    ]
    query = "&".join(kept)
    if query and query == parts.query:
        return url

    return urlunsplit(parts._replace(query=query))
