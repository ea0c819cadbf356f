"""DOM helpers shared by transformers and emoji substitution."""

import re
from typing import Callable, Iterable, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

HTML_PARSER = "html.parser"

Replacement = Union[Tag, NavigableString]


def parse_html(html: str) -> BeautifulSoup:
    """parses an HTML fragment without adding html/body wrappers."""
    return BeautifulSoup(html, HTML_PARSER)


def serialize(soup: BeautifulSoup) -> str:
    """serializes a parsed fragment back to HTML."""
    return str(soup)


def new_tag(
    soup: BeautifulSoup,
    name: str,
    attrs: dict[str, str],
    children: Iterable[Replacement] = (),
) -> Tag:
    """
    creates a tag with attributes in the given order.

    Args:
        soup: document that owns the tag
        name: tag name
        attrs: attribute mapping (insertion order is serialization order)
        children: nodes appended to the new tag

    Returns:
        the new tag
    """
    tag = soup.new_tag(name, attrs=dict(attrs))
    for child in children:
        tag.append(child)
    return tag


def has_ancestor(node: NavigableString, names: Iterable[str]) -> bool:
    """checks if any ancestor of node is one of the named tags."""
    wanted = set(names)
    return any(parent.name in wanted for parent in node.parents)


def text_nodes(soup: BeautifulSoup, skip: Iterable[str]) -> list[NavigableString]:
    """
    returns plain text nodes outside the skipped containers.

    Comments, CDATA and doctype nodes are never returned. The list is a
    snapshot, so callers may replace nodes while iterating.
    """
    skipped = frozenset(skip)
    return [
        node
        for node in soup.find_all(string=True)
        if type(node) is NavigableString  # pylint: disable=unidiomatic-typecheck
        and not has_ancestor(node, skipped)
    ]


def replace_matches(
    node: NavigableString,
    pattern: "re.Pattern[str]",
    build: Callable[["re.Match[str]"], Optional[Replacement]],
) -> int:
    """
    replaces pattern matches inside a text node with built nodes.

    Args:
        node: text node to split
        pattern: compiled pattern to search for
        build: returns the replacement node, or None to keep the match as text

    Returns:
        number of matches replaced
    """
    text = str(node)
    parts: list[Replacement] = []
    last = 0
    replaced = 0

    for match in pattern.finditer(text):
        replacement = build(match)
        if replacement is None:
            continue
        if match.start() > last:
            parts.append(NavigableString(text[last : match.start()]))
        parts.append(replacement)
        last = match.end()
        replaced += 1

    if not replaced:
        return 0

    if last < len(text):
        parts.append(NavigableString(text[last:]))
    node.replace_with(*parts)
    return replaced
