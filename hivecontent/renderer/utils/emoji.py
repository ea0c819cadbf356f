"""inline :owner/name: emoji substitution on sanitized HTML."""

import logging
import re
from typing import Optional
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag

from hivecontent.renderer.utils.dom import (
    new_tag,
    parse_html,
    replace_matches,
    serialize,
    text_nodes,
)

logger = logging.getLogger(__name__)

EMOJI_PATTERN = re.compile(r":([a-z0-9._-]+/)?([a-z0-9._-]{1,32}):", re.IGNORECASE)

# literal text containers, tokens inside them are never substituted
SKIP_TAGS = frozenset({"code", "pre", "script", "style", "textarea", "kbd", "samp"})

SPAN_STYLE = "display: inline-flex; align-items: center; vertical-align: middle; margin: 0 0.05em;"
IMG_STYLE = (
    "display: inline-block; width: 1em; height: 1em; max-width: none; "
    "max-height: none; margin: 0; object-fit: contain; vertical-align: middle;"
)


def normalize_owner(owner: Optional[str]) -> Optional[str]:
    """strips a leading @ and surrounding whitespace; empty owners become None."""
    if not owner:
        return None
    normalized = owner.strip()
    if normalized.startswith("@"):
        normalized = normalized[1:].strip()
    return normalized or None


def emoji_url(base_url: str, owner: str, name: str) -> str:
    """builds the image URL for an emoji."""
    return f"{base_url.rstrip('/')}/@{quote(owner, safe='')}/@{quote(name, safe='')}"


def _emoji_tag(soup: BeautifulSoup, base_url: str, owner: str, name: str, token: str) -> Tag:
    img = new_tag(
        soup,
        "img",
        {
            "class": "hivemoji__img",
            "src": emoji_url(base_url, owner, name),
            "alt": token,
            "loading": "lazy",
            "decoding": "async",
            "style": IMG_STYLE,
        },
    )
    return new_tag(
        soup,
        "span",
        {"class": "hivemoji", "role": "img", "aria-label": token, "style": SPAN_STYLE},
        [img],
    )


def substitute_emoji(html: str, base_url: str, default_owner: Optional[str] = None) -> str:
    """
    replaces :owner/name: and :name: tokens with emoji images.

    The image alt text is the original token, so a broken image still reads
    as the token. Tokens without an explicit or default owner stay literal.

    Args:
        html: sanitized HTML
        base_url: emoji service base URL
        default_owner: owner used for :name: tokens

    Returns:
        HTML with emoji markup (must be sanitized again by the caller)
    """
    if not html or ":" not in html or not EMOJI_PATTERN.search(html):
        return html

    fallback_owner = normalize_owner(default_owner)
    soup = parse_html(html)
    replaced = 0

    def build(match: "re.Match[str]") -> Optional[Tag]:
        explicit, name = match.group(1), match.group(2)
        owner = normalize_owner(explicit[:-1]) if explicit else fallback_owner
        if not owner:
            return None
        return _emoji_tag(soup, base_url, owner, name, match.group(0))

    for node in text_nodes(soup, SKIP_TAGS):
        if ":" in node:
            replaced += replace_matches(node, EMOJI_PATTERN, build)

    if not replaced:
        return html

    logger.debug("substituted %d emoji tokens", replaced)
    return serialize(soup)
