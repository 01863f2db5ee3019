"""
Sanitization policy for HTML rendered from wiki text.

The policy is the allowlist handed to the sanitizer engine: which tags,
attributes and URL schemes survive, plus the post-filters that run on each
element afterwards. ``DEFAULT_POLICY`` is the engine's baseline;
``build_policy`` derives the wiki policy from it and ``get_policy`` returns
the process-wide instance.
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .filters import CodeClassFilter, FootnoteIdFilter, OrphanElementFilter
from .urls import RELATIVE, SAFE_URL_SCHEMES, uri_with_safe_scheme

logger = logging.getLogger(__name__)

# Attribute allowlist key that applies to every tag
ALL_TAGS = "*"


class PolicyConfigurationError(ValueError):
    """The default policy lacks an entry an override depends on."""


@dataclass(frozen=True)
class Policy:
    """Immutable allowlist consumed by the sanitizer engine."""

    elements: frozenset
    attributes: Mapping[str, frozenset]
    protocols: Mapping[tuple, tuple]
    post_filters: tuple = ()
    remove_contents: frozenset = frozenset()

    def allowed_attributes(self, tag: str) -> frozenset:
        """Attributes allowed on tag: its own entry plus the wildcard entry."""
        return self.attributes.get(ALL_TAGS, frozenset()) | self.attributes.get(
            tag, frozenset()
        )

    def allows_attribute(self, tag: str, name: str, value: str) -> bool:
        """Check an attribute against the allowlist and its scheme entry."""
        if name not in self.allowed_attributes(tag):
            return False

        schemes = self.protocols.get((tag, name))
        if schemes is None:
            return True
        return uri_with_safe_scheme(value, schemes)

    def schemes(self) -> frozenset:
        """Every concrete scheme named in the protocol allowlist."""
        return frozenset(
            scheme
            for schemes in self.protocols.values()
            for scheme in schemes
            if scheme is not RELATIVE
        )


def make_policy(
    elements,
    attributes: dict,
    protocols: dict,
    post_filters=(),
    remove_contents=(),
) -> Policy:
    """Build a Policy from plain containers, freezing every level."""
    return Policy(
        elements=frozenset(elements),
        attributes=MappingProxyType(
            {tag: frozenset(names) for tag, names in attributes.items()}
        ),
        protocols=MappingProxyType(
            {key: tuple(schemes) for key, schemes in protocols.items()}
        ),
        post_filters=tuple(post_filters),
        remove_contents=frozenset(remove_contents),
    )


_CITE_SCHEMES = ("http", "https", RELATIVE)

DEFAULT_POLICY = make_policy(
    elements=[
        "h1", "h2", "h3", "h4", "h5", "h6", "h7", "h8",
        "br", "b", "i", "strong", "em", "a", "pre", "code", "img", "tt",
        "div", "ins", "del", "sup", "sub", "p", "ol", "ul",
        "table", "thead", "tbody", "tfoot", "blockquote",
        "dl", "dt", "dd", "kbd", "q", "samp", "var", "hr",
        "ruby", "rt", "rp", "li", "tr", "td", "th", "s", "strike",
        "summary", "details", "caption", "figure", "figcaption",
        "abbr", "bdo", "cite", "dfn", "mark", "small", "span", "time", "wbr",
    ],
    attributes={
        "a": ["href"],
        "img": ["src", "longdesc"],
        "div": ["itemscope", "itemtype"],
        "blockquote": ["cite"],
        "del": ["cite"],
        "ins": ["cite"],
        "q": ["cite"],
        ALL_TAGS: [
            "abbr", "accept", "accept-charset", "accesskey", "action",
            "align", "alt", "aria-describedby", "aria-hidden", "aria-label",
            "aria-labelledby", "axis", "border", "cellpadding", "cellspacing",
            "char", "charoff", "charset", "checked", "clear", "cols",
            "colspan", "color", "compact", "coords", "datetime", "dir",
            "disabled", "enctype", "for", "frame", "headers", "height",
            "hreflang", "hspace", "ismap", "label", "lang", "maxlength",
            "media", "method", "multiple", "name", "nohref", "noshade",
            "nowrap", "open", "progress", "prompt", "readonly", "rel", "rev",
            "role", "rows", "rowspan", "rules", "scope", "selected", "shape",
            "size", "span", "start", "summary", "tabindex", "target", "title",
            "type", "usemap", "valign", "value", "vspace", "width", "itemprop",
        ],
    },
    protocols={
        ("a", "href"): (
            "http", "https", "mailto", "xmpp", RELATIVE,
            "github-windows", "github-mac", "x-github-client",
        ),
        ("blockquote", "cite"): _CITE_SCHEMES,
        ("del", "cite"): _CITE_SCHEMES,
        ("ins", "cite"): _CITE_SCHEMES,
        ("q", "cite"): _CITE_SCHEMES,
        ("img", "src"): _CITE_SCHEMES,
        ("img", "longdesc"): _CITE_SCHEMES,
    },
    post_filters=[OrphanElementFilter],
    remove_contents=["script"],
)


def _require(attributes: dict, tag: str) -> set:
    if tag not in attributes:
        raise PolicyConfigurationError(
            f"Default policy has no attribute entry for {tag!r}"
        )
    return attributes[tag]


def build_policy(default_policy: Policy) -> Policy:
    """
    Derive the wiki policy from the engine's default policy.

    The default is never modified. Post-filters already present in the
    default run first; the ones added here are appended after them.

    Raises:
        PolicyConfigurationError: the default lacks the wildcard or ``a``
            attribute entry.
    """
    attributes = {
        tag: set(names) for tag, names in default_policy.attributes.items()
    }
    protocols = dict(default_policy.protocols)
    post_filters = list(default_policy.post_filters)

    all_tags = _require(attributes, ALL_TAGS)
    anchor = _require(attributes, "a")

    # `name` only on anchors
    all_tags.discard("name")
    anchor.add("name")

    # fenced code blocks carry their language as class="language-foo"
    attributes["code"] = {"class"}
    post_filters.append(CodeClassFilter)

    # footnote references (a#fnrefN) and definitions (li#fnN)
    anchor.add("id")
    attributes["li"] = {"id"}
    post_filters.append(FootnoteIdFilter)

    # same schemes as every other link check
    protocols[("a", "href")] = SAFE_URL_SCHEMES

    return make_policy(
        elements=default_policy.elements,
        attributes=attributes,
        protocols=protocols,
        post_filters=post_filters,
        remove_contents=default_policy.remove_contents,
    )


_policy: Optional[Policy] = None
_policy_lock = threading.Lock()


def get_policy() -> Policy:
    """Return the process-wide wiki policy, building it on first use."""
    global _policy

    policy = _policy
    if policy is not None:
        return policy

    with _policy_lock:
        if _policy is None:
            _policy = build_policy(DEFAULT_POLICY)
            logger.info(
                "Built sanitization policy: %d elements, %d post-filters",
                len(_policy.elements),
                len(_policy.post_filters),
            )
        return _policy


def reset_policy() -> None:
    """Drop the cached policy (for testing)."""
    global _policy

    with _policy_lock:
        _policy = None
