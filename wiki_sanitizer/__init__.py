"""HTML sanitization policy for rendered wiki text."""

from .urls import RELATIVE, SAFE_URL_SCHEMES, uri_with_safe_scheme
from .filters import (
    PostFilter,
    CodeClassFilter,
    FootnoteIdFilter,
    OrphanElementFilter,
)
from .policy import (
    ALL_TAGS,
    DEFAULT_POLICY,
    Policy,
    PolicyConfigurationError,
    build_policy,
    get_policy,
    make_policy,
    reset_policy,
)
from .sanitizer import sanitize_html, safe_html

__all__ = [
    "RELATIVE",
    "SAFE_URL_SCHEMES",
    "uri_with_safe_scheme",
    "PostFilter",
    "CodeClassFilter",
    "FootnoteIdFilter",
    "OrphanElementFilter",
    "ALL_TAGS",
    "DEFAULT_POLICY",
    "Policy",
    "PolicyConfigurationError",
    "build_policy",
    "get_policy",
    "make_policy",
    "reset_policy",
    "sanitize_html",
    "safe_html",
]
