"""Central URL scheme policy shared by link validation and the HTML allowlist."""

from urllib.parse import urlsplit


class _Relative:
    """Marker for a URL without a scheme (relative reference)."""

    def __repr__(self) -> str:
        return "RELATIVE"


RELATIVE = _Relative()

SAFE_URL_SCHEMES: tuple = ("http", "https", "ftp", "mailto", RELATIVE)


def uri_with_safe_scheme(uri: str, schemes: tuple = SAFE_URL_SCHEMES) -> bool:
    """
    Return True if uri uses one of the given schemes.

    URIs without a protocol separator are relative to the current document
    or site root and are accepted when RELATIVE is among the schemes.

    Examples:
        uri_with_safe_scheme("https://example.com") -> True
        uri_with_safe_scheme("/wiki/Foo") -> True
        uri_with_safe_scheme("javascript:alert(1)") -> False
    """
    uri = (uri or "").strip()
    if ":" not in uri:
        return RELATIVE in schemes

    try:
        scheme = urlsplit(uri).scheme
    except ValueError:
        return False

    return (scheme.lower() if scheme else RELATIVE) in schemes
