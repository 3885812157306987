"""Classified scraper errors.

Every pipeline stage raises a subclass of :class:`ScraperError`.  Callers can
branch on the exception type or on :attr:`ScraperError.kind` without
inspecting message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    TRANSPORT_FAILURE = "transport_failure"


class ScraperError(Exception):
    """Base class for every failure the fetch pipeline can report."""

    kind: ErrorKind


class InvalidUrlError(ScraperError):
    """The input is not a well-formed ``http``/``https`` URL."""

    kind = ErrorKind.INVALID_URL

    def __init__(self, reason: str, value: str) -> None:
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid URL: {reason}")


class _HttpStatusError(ScraperError):
    label = "HTTP error"

    def __init__(self, status_code: int, url: str, body: str) -> None:
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(f"{self.label} (status: {status_code}): {url} - {body}")


class ClientError(_HttpStatusError):
    """The server answered with a 4xx status."""

    kind = ErrorKind.CLIENT_ERROR
    label = "Client error"


class ServerError(_HttpStatusError):
    """The server answered with a 5xx status."""

    kind = ErrorKind.SERVER_ERROR
    label = "Server error"


class FetchTimeoutError(ScraperError):
    """The request did not complete within the configured timeout."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, description: str, url: str) -> None:
        self.description = description
        self.url = url
        super().__init__(f"Timeout error {url}: {description}")


class TransportError(ScraperError):
    """Any other network-level failure (DNS, TLS, connection refused, ...)."""

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, description: str, url: str) -> None:
        self.description = description
        self.url = url
        super().__init__(f"Scraper error {url}: {description}")
