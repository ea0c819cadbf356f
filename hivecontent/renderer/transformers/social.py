"""Twitter/X and Instagram post embeds."""

import logging
import re
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.transformers import EmbedLedger, transformer
from hivecontent.renderer.utils.dom import new_tag, replace_matches, text_nodes

logger = logging.getLogger(__name__)

# bare URLs inside these stay text
BARE_URL_SKIP_TAGS = frozenset({"a", "code", "pre", "script", "style", "textarea"})

TWEET_LINK_PATTERN = re.compile(
    r"^https?://(?:www\.)?(?:twitter\.com|x\.com)/([^/\s]+)/status/(\d+)", re.IGNORECASE
)
TWEET_URL_PATTERN = re.compile(
    r"https?://(?:www\.)?(?:twitter\.com|x\.com)/[^/\s<]+/status/(\d+)", re.IGNORECASE
)
INSTAGRAM_LINK_PATTERN = re.compile(
    r"^https?://(?:www\.)?instagram\.com/(?:p|reel|tv)/([a-zA-Z0-9_-]+)", re.IGNORECASE
)
INSTAGRAM_URL_PATTERN = re.compile(
    r"https?://(?:www\.)?instagram\.com/(?:p|reel|tv)/([a-zA-Z0-9_-]+)[^\s<]*", re.IGNORECASE
)


def tweet_embed(soup: BeautifulSoup, tweet_id: str) -> Tag:
    """builds the scriptless iframe embed for a tweet."""
    iframe = new_tag(
        soup,
        "iframe",
        {
            "src": f"https://platform.twitter.com/embed/Tweet.html?id={tweet_id}&dnt=true",
            "width": "550",
            "height": "250",
            "frameborder": "0",
            "scrolling": "no",
            "allowtransparency": "true",
            "loading": "lazy",
            "style": "border: 1px solid #ccc; border-radius: 12px;",
        },
    )
    return new_tag(
        soup, "div", {"class": "twitter-embed-container", "style": "max-width: 550px;"}, [iframe]
    )


def instagram_embed(soup: BeautifulSoup, post_code: str) -> Tag:
    """builds the iframe embed for an Instagram post, reel or video."""
    iframe = new_tag(
        soup,
        "iframe",
        {
            "src": f"https://www.instagram.com/p/{post_code}/embed",
            "width": "400",
            "height": "480",
            "frameborder": "0",
            "scrolling": "no",
            "allowtransparency": "true",
            "loading": "lazy",
        },
    )
    return new_tag(soup, "div", {"class": "instagram-embed-container"}, [iframe])


def embed_posts(
    soup: BeautifulSoup,
    ledger: EmbedLedger,
    kind: str,
    link_pattern: "re.Pattern[str]",
    url_pattern: "re.Pattern[str]",
    build: Callable[[BeautifulSoup, str], Tag],
) -> int:
    """
    embeds anchors first, then bare URLs in text, sharing one dedup kind.

    Args:
        soup: parsed document
        ledger: call-scoped dedup state
        kind: ledger key for this platform
        link_pattern: matches an anchor href, last group is the post id
        url_pattern: matches a bare URL in text, group 1 is the post id
        build: builds the embed for a post id

    Returns:
        number of embeds created
    """
    replaced = 0

    for anchor in soup.find_all("a", href=True):
        match = link_pattern.match(anchor["href"].strip())
        if not match:
            continue
        post_id = match.group(match.lastindex or 0)
        if ledger.claim(kind, post_id):
            anchor.replace_with(build(soup, post_id))
            replaced += 1

    def replacement(match: "re.Match[str]") -> Optional[Tag]:
        if not ledger.claim(kind, match.group(1)):
            return None
        return build(soup, match.group(1))

    for node in text_nodes(soup, BARE_URL_SKIP_TAGS):
        replaced += replace_matches(node, url_pattern, replacement)

    return replaced


@transformer("twitter", order=40)
class TwitterTransformer:  # pylint: disable=too-few-public-methods
    """embeds twitter.com and x.com status links."""

    def apply(self, soup: BeautifulSoup, _options: RendererOptions, ledger: EmbedLedger) -> int:
        """embeds each tweet id once."""
        replaced = embed_posts(
            soup, ledger, "tweet", TWEET_LINK_PATTERN, TWEET_URL_PATTERN, tweet_embed
        )
        if replaced:
            logger.debug("embedded %d tweets", replaced)
        return replaced


@transformer("instagram", order=50)
class InstagramTransformer:  # pylint: disable=too-few-public-methods
    """embeds Instagram post, reel and tv links."""

    def apply(self, soup: BeautifulSoup, _options: RendererOptions, ledger: EmbedLedger) -> int:
        """embeds each post code once."""
        replaced = embed_posts(
            soup,
            ledger,
            "instagram",
            INSTAGRAM_LINK_PATTERN,
            INSTAGRAM_URL_PATTERN,
            instagram_embed,
        )
        if replaced:
            logger.debug("embedded %d Instagram posts", replaced)
        return replaced
