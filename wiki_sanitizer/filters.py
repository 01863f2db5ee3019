"""
Node-level post-filters run after the baseline allowlist pass.

Each filter is an html5lib token filter (as accepted by bleach's Cleaner)
and only narrows the output: it removes attributes or unwraps elements,
never adds anything back.
"""

import logging
import re

from bleach.html5lib_shim import Filter

logger = logging.getLogger(__name__)

ELEMENT_TOKENS = ("StartTag", "EmptyTag")


def get_attribute(token: dict, name: str):
    """Return the value of an attribute on an element token, or None."""
    data = token.get("data") or {}
    return data.get((None, name))


def remove_attribute(token: dict, name: str) -> None:
    data = token.get("data") or {}
    data.pop((None, name), None)


class PostFilter(Filter):
    """
    Base for rules applied to every element after baseline filtering.

    Subclasses name the tags they inspect in ``tags`` and implement
    ``transform``, which receives the start token of each matching element.
    """

    tags: frozenset = frozenset()

    def __iter__(self):
        for token in Filter.__iter__(self):
            if token["type"] in ELEMENT_TOKENS and token["name"] in self.tags:
                self.transform(token)
            yield token

    def transform(self, token: dict) -> None:
        raise NotImplementedError


class CodeClassFilter(PostFilter):
    """Keep ``class`` on ``code`` only when it holds a fenced block language."""

    tags = frozenset({"code"})
    pattern = re.compile(r"language-[A-Za-z0-9_]+")

    def transform(self, token: dict) -> None:
        value = get_attribute(token, "class")
        if value is None:
            return

        if not self.pattern.fullmatch(value):
            logger.debug("Stripped class=%r from <code>", value)
            remove_attribute(token, "class")


class FootnoteIdFilter(PostFilter):
    """Keep ``id`` on ``a`` and ``li`` only for footnote references."""

    tags = frozenset({"a", "li"})
    patterns = {
        "a": re.compile(r"fnref[0-9]+"),
        "li": re.compile(r"fn[0-9]+"),
    }

    def transform(self, token: dict) -> None:
        value = get_attribute(token, "id")
        if value is None:
            return

        if not self.patterns[token["name"]].fullmatch(value):
            logger.debug("Stripped id=%r from <%s>", value, token["name"])
            remove_attribute(token, "id")


class OrphanElementFilter(Filter):
    """
    Unwrap list items and table parts that sit outside their container.

    A top-level ``li`` or a ``td`` without a surrounding ``table`` can break
    out of the markup it is embedded in. The element's tags are dropped and
    its children kept in place.
    """

    required_ancestors = {
        "li": frozenset({"ul", "ol"}),
        "thead": frozenset({"table"}),
        "tbody": frozenset({"table"}),
        "tfoot": frozenset({"table"}),
        "tr": frozenset({"table"}),
        "td": frozenset({"table"}),
        "th": frozenset({"table"}),
    }

    def __iter__(self):
        # (name, unwrapped) for every element currently open
        open_elements = []

        for token in Filter.__iter__(self):
            kind = token["type"]

            if kind == "StartTag":
                name = token["name"]
                required = self.required_ancestors.get(name)
                unwrap = required is not None and not any(
                    ancestor in required
                    for ancestor, unwrapped in open_elements
                    if not unwrapped
                )
                open_elements.append((name, unwrap))
                if unwrap:
                    logger.debug("Unwrapped orphan <%s>", name)
                    continue

            elif kind == "EndTag" and open_elements:
                _, unwrapped = open_elements.pop()
                if unwrapped:
                    continue

            yield token


class ContentRemovalFilter(Filter):
    """Drop the given elements together with everything inside them."""

    def __init__(self, source, tags=frozenset()):
        super().__init__(source)
        self.tags = frozenset(tags)

    def __iter__(self):
        depth = 0

        for token in Filter.__iter__(self):
            kind = token["type"]

            if depth:
                if kind == "StartTag":
                    depth += 1
                elif kind == "EndTag":
                    depth -= 1
                continue

            if kind == "StartTag" and token["name"] in self.tags:
                logger.debug("Removed <%s> and its contents", token["name"])
                depth = 1
                continue

            if kind == "EmptyTag" and token["name"] in self.tags:
                continue

            yield token
