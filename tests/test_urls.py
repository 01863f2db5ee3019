"""Tests for the URL scheme policy."""

from wiki_sanitizer.urls import RELATIVE, SAFE_URL_SCHEMES, uri_with_safe_scheme


class TestUriWithSafeScheme:
    def test_http(self):
        assert uri_with_safe_scheme("http://example.com") is True

    def test_https(self):
        assert uri_with_safe_scheme("https://example.com/a?b=c") is True

    def test_ftp(self):
        assert uri_with_safe_scheme("ftp://ftp.example.com/file") is True

    def test_mailto(self):
        assert uri_with_safe_scheme("mailto:dev@example.com") is True

    def test_scheme_is_case_insensitive(self):
        assert uri_with_safe_scheme("HTTPS://example.com") is True

    def test_relative_path(self):
        assert uri_with_safe_scheme("/wiki/Foo") is True
        assert uri_with_safe_scheme("Foo") is True
        assert uri_with_safe_scheme("#fn1") is True

    def test_colon_in_path_is_relative(self):
        assert uri_with_safe_scheme("/wiki/Foo:Bar") is True

    def test_javascript(self):
        assert uri_with_safe_scheme("javascript:alert(1)") is False

    def test_javascript_with_padding(self):
        assert uri_with_safe_scheme("  JavaScript:alert(1)") is False

    def test_data(self):
        assert uri_with_safe_scheme("data:text/html,<b>x</b>") is False

    def test_file(self):
        assert uri_with_safe_scheme("file:///etc/passwd") is False

    def test_unparseable(self):
        assert uri_with_safe_scheme("http://[::1") is False

    def test_empty(self):
        assert uri_with_safe_scheme("") is True
        assert uri_with_safe_scheme(None) is True


def test_relative_not_allowed_without_sentinel():
    """Without RELATIVE, scheme-less URIs are rejected."""
    assert uri_with_safe_scheme("/wiki/Foo", ("http", "https")) is False
    assert uri_with_safe_scheme("https://example.com", ("http", "https")) is True


def test_safe_schemes():
    """Links may use http, https, ftp, mailto or no scheme."""
    assert SAFE_URL_SCHEMES == ("http", "https", "ftp", "mailto", RELATIVE)
