"""Sanitize rendered wiki HTML with bleach, driven by a Policy."""

import functools
import logging
import threading
from typing import Optional

from bleach.sanitizer import Cleaner
from markupsafe import Markup

from .config import SanitizerSettings, get_settings
from .filters import ContentRemovalFilter
from .policy import Policy, get_policy

logger = logging.getLogger(__name__)

# html5lib parsers keep state, so each thread gets its own cleaners
_local = threading.local()


def build_cleaner(policy: Policy, settings: SanitizerSettings) -> Cleaner:
    """Map a Policy onto a bleach Cleaner."""
    filters = [functools.partial(ContentRemovalFilter, tags=policy.remove_contents)]
    filters.extend(policy.post_filters)

    return Cleaner(
        tags=policy.elements | policy.remove_contents,
        attributes=policy.allows_attribute,
        protocols=policy.schemes(),
        strip=settings.strip,
        strip_comments=settings.strip_comments,
        filters=filters,
    )


def _get_cleaner(policy: Policy) -> Cleaner:
    settings = get_settings()
    cache = getattr(_local, "cleaners", None)
    if cache is None:
        cache = _local.cleaners = {}

    key = (id(policy), settings)
    cached = cache.get(key)
    if cached is not None and cached[0] is policy:
        return cached[1]

    logger.debug("Creating cleaner for policy %#x (%s)", id(policy), settings)
    cleaner = build_cleaner(policy, settings)
    cache[key] = (policy, cleaner)
    return cleaner


def sanitize_html(raw_html: str, policy: Optional[Policy] = None) -> str:
    """Sanitize rendered wiki HTML against policy (default: the wiki policy)."""
    if not raw_html:
        return ""
    if policy is None:
        policy = get_policy()
    return _get_cleaner(policy).clean(raw_html)


def safe_html(raw_html: str) -> Markup:
    """Return sanitized HTML marked safe for Jinja rendering."""
    return Markup(sanitize_html(raw_html))
