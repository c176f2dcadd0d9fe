"""Tests for URL canonicalization."""

import pytest

from txintel.utils.urls import TRACKING_PARAMS, canonicalize_url, link_key


class TestCanonicalizeUrl:
    """Tests for canonicalize_url."""

    def test_removes_single_tracking_param(self):
        assert canonicalize_url("https://x.gov/a?utm_source=rss") == "https://x.gov/a"

    def test_removes_every_tracking_param(self):
        query = "&".join(f"{param}=v" for param in sorted(TRACKING_PARAMS))
        assert canonicalize_url(f"https://x.gov/a?{query}") == "https://x.gov/a"

    def test_keeps_other_params_in_order(self):
        url = "https://x.gov/a?id=5&utm_medium=email&b=2&utm_campaign=spring"
        assert canonicalize_url(url) == "https://x.gov/a?id=5&b=2"

    def test_keeps_non_tracking_utm_like_params(self):
        url = "https://x.gov/a?utm_id=7&utm_source_platform=x"
        assert canonicalize_url(url) == url

    def test_preserves_fragment_and_encoding(self):
        url = "https://x.gov/a%20b?q=hello%20world&utm_term=x#section"
        assert canonicalize_url(url) == "https://x.gov/a%20b?q=hello%20world#section"

    def test_lowercases_scheme_and_host(self):
        assert canonicalize_url("HTTPS://WWW.TCEQ.Texas.gov/News") == "https://www.tceq.texas.gov/News"

    @pytest.mark.parametrize(
        "url",
        ["not a url", "/relative/path?utm_source=x", "mailto:someone@example.com"],
    )
    def test_unparseable_returned_unchanged(self, url):
        assert canonicalize_url(url) == url

    def test_invalid_ipv6_host_returned_unchanged(self):
        assert canonicalize_url("http://[::1/path") == "http://[::1/path"

    @pytest.mark.parametrize("url", ["  not a url  ", " /relative?utm_source=x\n", "  http://[::1/path "])
    def test_unparseable_keeps_surrounding_whitespace(self, url):
        assert canonicalize_url(url) == url

    def test_absolute_url_is_trimmed(self):
        assert canonicalize_url("  https://x.gov/a?utm_source=rss \n") == "https://x.gov/a"

    def test_empty(self):
        assert canonicalize_url("") == ""
        assert canonicalize_url(None) == ""

    @pytest.mark.parametrize(
        "url",
        [
            "https://x.gov/a?utm_source=rss",
            "https://x.gov/a?id=1&utm_content=c&z=9",
            "https://x.gov/path/",
            "https://x.gov/?a=&b",
            "not a url",
        ],
    )
    def test_idempotent(self, url):
        once = canonicalize_url(url)
        assert canonicalize_url(once) == once

    def test_link_key_is_case_folded(self):
        assert link_key("https://x.gov/A?utm_source=rss") == link_key("https://X.gov/a")
