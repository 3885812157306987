"""HTTP fetcher: one GET, no retries, every failure classified."""

from __future__ import annotations

import time
from typing import Optional

import httpx
import structlog

from linkgrab.scraper.errors import (
    ClientError,
    FetchTimeoutError,
    ServerError,
    TransportError,
)
from linkgrab.scraper.models import FetchedPage

logger = structlog.get_logger(__name__)

# Error bodies are cut to this many characters before being attached to a
# ClientError / ServerError.
ERROR_BODY_EXCERPT_LIMIT = 200
_TRUNCATION_MARKER = "... [truncated]"
_UNREADABLE_BODY = "Unable to read response body"


def _excerpt(body: str) -> str:
    if len(body) > ERROR_BODY_EXCERPT_LIMIT:
        return body[:ERROR_BODY_EXCERPT_LIMIT] + _TRUNCATION_MARKER
    return body


def _remaining(deadline: float, url: str) -> float:
    """Seconds left before *deadline*; raises once it has passed."""
    left = deadline - time.monotonic()
    if left <= 0:
        raise FetchTimeoutError("overall request deadline exceeded", url)
    return left


def _open(
    client: httpx.Client, url: str, user_agent: str, deadline: float
) -> httpx.Response:
    """Send the GET and follow redirects, returning the final streamed response.

    Redirects are followed here rather than by httpx so that every hop gets
    only the time still left before *deadline* as its per-phase timeout.
    """
    request = client.build_request(
        "GET",
        url,
        headers={"User-Agent": user_agent},
        timeout=httpx.Timeout(_remaining(deadline, url)),
    )
    for _ in range(client.max_redirects + 1):
        response = client.send(request, stream=True, follow_redirects=False)
        try:
            left = _remaining(deadline, url)
        except FetchTimeoutError:
            response.close()
            raise
        if response.next_request is None:
            return response
        response.close()
        request = response.next_request
        request.extensions = {
            **request.extensions,
            "timeout": httpx.Timeout(left).as_dict(),
        }
    raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)


def _read_text(response: httpx.Response, deadline: float, url: str) -> str:
    """Drain a streamed *response* and decode it, giving up at *deadline*."""
    chunks: list[bytes] = []
    for chunk in response.iter_bytes():
        _remaining(deadline, url)
        chunks.append(chunk)
    return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")


def _read_error_body(response: httpx.Response, deadline: float, url: str) -> str:
    try:
        return _excerpt(_read_text(response, deadline, url))
    except (httpx.HTTPError, FetchTimeoutError):
        return _UNREADABLE_BODY


def _fetch(
    client: httpx.Client, url: str, timeout: float, user_agent: str
) -> FetchedPage:
    deadline = time.monotonic() + timeout
    response = _open(client, url, user_agent, deadline)
    try:
        status = response.status_code

        if response.is_client_error:
            body = _read_error_body(response, deadline, url)
            logger.warning("fetcher.client_error", url=url, status_code=status)
            raise ClientError(status, url, body)
        if response.is_server_error:
            body = _read_error_body(response, deadline, url)
            logger.warning("fetcher.server_error", url=url, status_code=status)
            raise ServerError(status, url, body)

        html = _read_text(response, deadline, url)
        final_url = str(response.url)
    finally:
        response.close()

    logger.info(
        "fetcher.response",
        url=url,
        final_url=final_url,
        status_code=status,
        chars=len(html),
    )
    return FetchedPage(
        requested_url=url, final_url=final_url, status_code=status, html=html
    )


def fetch_page(
    url: str,
    timeout: float,
    user_agent: str,
    client: Optional[httpx.Client] = None,
) -> FetchedPage:
    """Fetch *url* with a single GET and return a :class:`FetchedPage`.

    Redirects are followed, and compressed transfer encodings are decoded
    by ``httpx``.  *timeout* (seconds) bounds the whole request.  Pass *client*
    to reuse an existing connection pool; headers and timeout are always sent
    per request, so a shared client keeps no request state.

    Raises:
        ClientError: On a 4xx response.
        ServerError: On a 5xx response.
        FetchTimeoutError: If the request does not finish within *timeout*.
        TransportError: On any other network failure (DNS, TLS, refused, ...)
            or a URL httpx refuses to send.
    """
    logger.info("fetcher.request", url=url, timeout=timeout)
    try:
        if client is None:
            with httpx.Client() as owned:
                return _fetch(owned, url, timeout, user_agent)
        return _fetch(client, url, timeout, user_agent)
    except httpx.TimeoutException as exc:
        logger.warning("fetcher.timeout", url=url, error=str(exc))
        raise FetchTimeoutError(str(exc) or type(exc).__name__, url) from exc
    except httpx.RequestError as exc:
        logger.warning("fetcher.transport_error", url=url, error=str(exc))
        raise TransportError(str(exc) or type(exc).__name__, url) from exc
    except httpx.InvalidURL as exc:
        logger.warning("fetcher.invalid_url", url=url, error=str(exc))
        raise TransportError(str(exc), url) from exc
