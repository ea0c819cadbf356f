"""IPFS video embeds and IPFS link download guard."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.transformers import EmbedLedger, transformer
from hivecontent.renderer.utils.dom import new_tag

logger = logging.getLogger(__name__)

# recognized in iframe sources even when not configured as gateways
EXTRA_GATEWAYS = ("https://ipfs.io", "https://gateway.pinata.cloud")

IPFS_LINK_PATTERN = re.compile(r"^https?://\S*(?:ipfs|bafy|Qm)", re.IGNORECASE)
OPEN_IN_NEW_TAB = "event.preventDefault(); window.open(this.href, '_blank'); return false;"


def ipfs_video_pattern(gateways: list[str]) -> "re.Pattern[str]":
    """builds the iframe src pattern for the given gateways plus the always-known ones."""
    known: list[str] = []
    for gateway in (*gateways, *EXTRA_GATEWAYS):
        if gateway not in known:
            known.append(gateway)
    alternatives = "|".join(re.escape(gateway) for gateway in known)
    return re.compile(rf"^(?:{alternatives})/ipfs/([a-zA-Z0-9\-?=&]+)$")


def video_element(soup: BeautifulSoup, content_id: str, options: RendererOptions) -> Tag:
    """
    builds a native video element with one source per configured gateway.

    Args:
        soup: document that owns the element
        content_id: IPFS hash (may carry a query string)
        options: rendering profile (gateways and size)

    Returns:
        the video tag
    """
    sources = [
        new_tag(soup, "source", {"src": f"{gateway}/ipfs/{content_id}", "type": "video/mp4"})
        for gateway in options.gateways
    ]
    return new_tag(
        soup,
        "video",
        {
            "controls": "",
            "muted": "",
            "preload": "none",
            "loading": "lazy",
            "width": str(options.assets_width),
            "height": str(options.assets_height),
        },
        sources,
    )


@transformer("ipfs-video", order=30)
class IpfsVideoTransformer:  # pylint: disable=too-few-public-methods
    """replaces IPFS gateway iframes with multi-source video elements."""

    def apply(self, soup: BeautifulSoup, options: RendererOptions, _ledger: EmbedLedger) -> int:
        """
        rewrites every iframe whose src is an IPFS path on a known gateway.

        Args:
            soup: parsed document
            options: rendering profile
            _ledger: call-scoped dedup state (unused, every iframe is rewritten)

        Returns:
            number of iframes replaced
        """
        pattern = ipfs_video_pattern(options.gateways)
        replaced = 0

        for iframe in soup.find_all("iframe", src=True):
            match = pattern.match(iframe["src"].strip())
            if not match:
                continue
            iframe.replace_with(video_element(soup, match.group(1), options))
            replaced += 1

        if replaced:
            logger.debug("converted %d IPFS iframes to video", replaced)
        return replaced


@transformer("ipfs-link-guard", order=60)
class IpfsLinkGuardTransformer:  # pylint: disable=too-few-public-methods
    """opens IPFS links in a new tab instead of downloading them in place."""

    def apply(self, soup: BeautifulSoup, _options: RendererOptions, _ledger: EmbedLedger) -> int:
        """adds target, rel and a new-tab click handler to IPFS anchors."""
        guarded = 0
        for anchor in soup.find_all("a", href=True):
            if not IPFS_LINK_PATTERN.match(anchor["href"].strip()):
                continue
            anchor["target"] = "_blank"
            anchor["rel"] = "noopener noreferrer"
            # removed again by the sanitizer, which forbids inline handlers
            anchor["onclick"] = OPEN_IN_NEW_TAB
            guarded += 1
        return guarded
