"""rewrites links to sibling Hive front-ends into internal post links."""

import logging
import re
from typing import Iterable

from bs4 import BeautifulSoup

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.transformers import EmbedLedger, transformer
from hivecontent.renderer.utils.dom import parse_html, serialize

logger = logging.getLogger(__name__)


def frontend_link_pattern(domains: Iterable[str]) -> "re.Pattern[str]":
    """
    builds the post URL pattern for the given front-end domains.

    Groups are author and permlink; the optional first path segment is a
    community or category.
    """
    alternatives = "|".join(re.escape(domain) for domain in domains if domain)
    return re.compile(
        rf"^https?://(?:www\.)?(?:{alternatives})/(?:[^/@\s]+/)?@([a-z0-9.-]+)/([a-z0-9-]+)$",
        re.IGNORECASE,
    )


def rewrite_frontend_links(soup: BeautifulSoup, domains: Iterable[str], prefix: str = "") -> int:
    """
    rewrites matching anchor hrefs in place.

    Args:
        soup: parsed document
        domains: recognized front-end domains
        prefix: prepended to /@author/permlink

    Returns:
        number of links rewritten
    """
    domain_list = [domain for domain in domains if domain]
    if not domain_list:
        return 0

    pattern = frontend_link_pattern(domain_list)
    rewritten = 0
    for anchor in soup.find_all("a", href=True):
        match = pattern.match(anchor["href"].strip())
        if not match:
            continue
        author, permlink = match.groups()
        anchor["href"] = f"{prefix}/@{author}/{permlink}"
        rewritten += 1
    return rewritten


def normalize_frontend_links(
    html: str, domains: Iterable[str], enabled: bool = True, prefix: str = ""
) -> str:
    """
    rewrites sibling front-end post links in an HTML string.

    Args:
        html: HTML fragment
        domains: recognized front-end domains
        enabled: when False the input is returned untouched
        prefix: prepended to /@author/permlink

    Returns:
        rewritten HTML, or the input unchanged when disabled or nothing matched
    """
    if not enabled or not html:
        return html
    soup = parse_html(html)
    if not rewrite_frontend_links(soup, domains, prefix):
        return html
    return serialize(soup)


@transformer("hive-links", order=70, requires="convert_hive_urls")
class FrontendLinkTransformer:  # pylint: disable=too-few-public-methods
    """points links to other Hive front-ends at this application."""

    def apply(self, soup: BeautifulSoup, options: RendererOptions, _ledger: EmbedLedger) -> int:
        """rewrites links for every configured front-end."""
        rewritten = rewrite_frontend_links(soup, options.frontends, options.internal_url_prefix)
        if rewritten:
            logger.debug("rewrote %d front-end links", rewritten)
        return rewritten
