"""Tests for URL validation and tracking-parameter cleanup."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import pytest

from linkgrab.scraper.errors import ErrorKind, InvalidUrlError
from linkgrab.scraper.urls import TRACKING_PARAMS, strip_tracking_params, validate_url


# ---------------------------------------------------------------------------
# validate_url
# ---------------------------------------------------------------------------

class TestValidateUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com",
            "https://example.com/path?q=1#frag",
            "https://sub.example.co.uk:8443/a/b",
            "HTTPS://EXAMPLE.COM/",
            "http://127.0.0.1/",
            "http://[::1]:8080/",
        ],
    )
    def test_accepts_web_urls(self, url: str) -> None:
        assert validate_url(url) == url

    @pytest.mark.parametrize(
        "url, scheme",
        [
            ("ftp://example.com/file.txt", "ftp"),
            ("file:///etc/passwd", "file"),
            ("javascript:alert(1)", "javascript"),
            ("mailto:someone@example.com", "mailto"),
        ],
    )
    def test_rejects_other_schemes(self, url: str, scheme: str) -> None:
        with pytest.raises(InvalidUrlError) as exc_info:
            validate_url(url)
        err = exc_info.value
        assert f"Unsupported scheme '{scheme}'" in err.reason
        assert err.value == url
        assert err.kind is ErrorKind.INVALID_URL

    @pytest.mark.parametrize(
        "url",
        ["", "example.com", "/relative/path", "not a url", "http://", "https:///path"],
    )
    def test_rejects_malformed(self, url: str) -> None:
        with pytest.raises(InvalidUrlError) as exc_info:
            validate_url(url)
        assert exc_info.value.reason.startswith("Failed to parse URL")

    def test_rejects_bad_port(self) -> None:
        with pytest.raises(InvalidUrlError, match="Failed to parse URL"):
            validate_url("http://example.com:notaport/")

    def test_rejects_broken_ipv6_host(self) -> None:
        with pytest.raises(InvalidUrlError, match="Failed to parse URL"):
            validate_url("http://[::1/")

    @pytest.mark.parametrize(
        "url",
        [
            "http://exa mple.com/",
            "http://exa<mple.com/",
            "http://exa>mple.com/",
            "http://exa\"mple.com/",
            "http://exa\x01mple.com/",
            "http://exa\x7fmple.com/",
        ],
    )
    def test_rejects_bad_host_characters(self, url: str) -> None:
        with pytest.raises(InvalidUrlError, match="Failed to parse URL"):
            validate_url(url)

    def test_rejects_url_httpx_cannot_send(self) -> None:
        url = "https://example.com/" + "a" * 70000
        with pytest.raises(InvalidUrlError) as exc_info:
            validate_url(url)
        assert exc_info.value.reason.startswith("Failed to parse URL")
        assert exc_info.value.value == url

    def test_message_is_prefixed(self) -> None:
        with pytest.raises(InvalidUrlError) as exc_info:
            validate_url("ftp://example.com")
        assert str(exc_info.value).startswith("Invalid URL: ")


# ---------------------------------------------------------------------------
# strip_tracking_params
# ---------------------------------------------------------------------------

class TestStripTrackingParams:
    def test_strips_utm_keeps_real_param(self) -> None:
        url = "https://example.com/page?utm_source=google&utm_medium=cpc&real_param=keep"
        assert strip_tracking_params(url) == "https://example.com/page?real_param=keep"

    def test_only_tracking_params_leaves_no_question_mark(self) -> None:
        url = "https://example.com/page?utm_source=a&fbclid=b&gclid=c"
        assert strip_tracking_params(url) == "https://example.com/page"

    def test_fragment_is_preserved(self) -> None:
        url = "https://example.com/page?utm_campaign=x#section-2"
        assert strip_tracking_params(url) == "https://example.com/page#section-2"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "https://example.com/page",
            "https://example.com/page#only-fragment",
        ],
    )
    def test_no_query_is_identity(self, url: str) -> None:
        assert strip_tracking_params(url) == url

    def test_nothing_to_strip_is_identity(self) -> None:
        url = "https://example.com/search?q=caf%C3%A9&page=2"
        assert strip_tracking_params(url) == url

    def test_matching_is_case_sensitive(self) -> None:
        url = "https://example.com/?UTM_SOURCE=x&utm_source=y&Ref=z"
        assert strip_tracking_params(url) == "https://example.com/?UTM_SOURCE=x&Ref=z"

    def test_preserves_order_and_repeated_keys(self) -> None:
        url = "https://example.com/?b=2&utm_source=x&a=1&b=3"
        assert strip_tracking_params(url) == "https://example.com/?b=2&a=1&b=3"

    def test_preserves_blank_values(self) -> None:
        url = "https://example.com/?flag=&ref=home"
        assert strip_tracking_params(url) == "https://example.com/?flag="

    def test_encoded_values_survive_verbatim(self) -> None:
        url = "https://example.com/?q=hello%20world&next=%2Fa%3Fb%3D1&utm_term=x"
        cleaned = strip_tracking_params(url)
        assert cleaned == "https://example.com/?q=hello%20world&next=%2Fa%3Fb%3D1"
        assert parse_qsl(urlsplit(cleaned).query) == [
            ("q", "hello world"),
            ("next", "/a?b=1"),
        ]

    def test_non_utf8_escapes_are_not_rewritten(self) -> None:
        url = "https://example.com/?q=%FF%FE&utm_source=x&name=caf%E9"
        assert strip_tracking_params(url) == "https://example.com/?q=%FF%FE&name=caf%E9"

    def test_plus_signs_are_not_rewritten(self) -> None:
        url = "https://example.com/?q=a+b%2Bc&fbclid=1"
        assert strip_tracking_params(url) == "https://example.com/?q=a+b%2Bc"

    def test_encoded_tracking_key_is_stripped(self) -> None:
        url = "https://example.com/?utm%5Fsource=x&id=1"
        assert strip_tracking_params(url) == "https://example.com/?id=1"

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://example.com/?", "https://example.com/"),
            ("https://example.com/?&", "https://example.com/"),
            ("https://example.com/page?&&#top", "https://example.com/page#top"),
        ],
    )
    def test_empty_query_drops_question_mark(self, url: str, expected: str) -> None:
        assert strip_tracking_params(url) == expected

    def test_question_mark_in_fragment_only_is_identity(self) -> None:
        url = "https://example.com/page#faq?x=1"
        assert strip_tracking_params(url) == url

    def test_empty_segments_are_dropped(self) -> None:
        url = "https://example.com/?a=1&&b=2"
        assert strip_tracking_params(url) == "https://example.com/?a=1&b=2"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/page?utm_source=google&utm_medium=cpc&real_param=keep",
            "https://example.com/?q=a+b&tag=x&z=%2F",
            "https://example.com/?fbclid=1#top",
            "https://example.com/plain",
        ],
    )
    def test_idempotent(self, url: str) -> None:
        once = strip_tracking_params(url)
        assert strip_tracking_params(once) == once

    def test_amazon_keys_are_case_sensitive_entries(self) -> None:
        assert "linkCode" in TRACKING_PARAMS
        url = "https://example.com/dp/1?linkCode=ll1&linkcode=keep"
        assert strip_tracking_params(url) == "https://example.com/dp/1?linkcode=keep"

    def test_custom_denylist(self) -> None:
        url = "https://example.com/?session=abc&utm_source=x"
        cleaned = strip_tracking_params(url, frozenset({"session"}))
        assert cleaned == "https://example.com/?utm_source=x"

    def test_does_not_mutate_denylist(self) -> None:
        before = set(TRACKING_PARAMS)
        strip_tracking_params("https://example.com/?utm_source=x")
        assert set(TRACKING_PARAMS) == before

    @pytest.mark.parametrize("url", ["", "no scheme here", "http://[::1/?a=1"])
    def test_malformed_input_raises(self, url: str) -> None:
        with pytest.raises(InvalidUrlError, match="Failed to parse URL for cleanup"):
            strip_tracking_params(url)
