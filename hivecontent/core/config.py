"""Rendering profile: static configuration shared by every render call."""

from dataclasses import dataclass, field
from typing import Callable, Optional

DEFAULT_BASE_URL = "https://hive.blog/"

# 3Speak first, it is optimized for Hive content
DEFAULT_IPFS_GATEWAY = "https://ipfs.3speak.tv"
DEFAULT_IPFS_FALLBACKS = (
    "https://ipfs.skatehive.app",
    "https://cloudflare-ipfs.com",
    "https://ipfs.io",
)

DEFAULT_HIVE_FRONTENDS = (
    "peakd.com",
    "ecency.com",
    "hive.blog",
    "hiveblog.io",
    "leofinance.io",
    "3speak.tv",
    "d.tube",
    "esteem.app",
    "busy.org",
)

DEFAULT_HIVEMOJI_BASE_URL = "https://hivemoji.hivelytics.io"


def default_usertag_url(account: str) -> str:
    """maps a username to its profile path."""
    return "/@" + account


def default_hashtag_url(hashtag: str) -> str:
    """maps a hashtag to its topic path."""
    return "/trending/" + hashtag


@dataclass(frozen=True)
class EmojiOptions:
    """inline :owner/name: emoji substitution."""

    enabled: bool = False
    base_url: str = DEFAULT_HIVEMOJI_BASE_URL
    default_owner: Optional[str] = None


@dataclass(frozen=True)
class RendererOptions:  # pylint: disable=too-many-instance-attributes
    """
    configuration for a Hive markdown renderer.

    Attributes:
        base_url: links to other hosts are marked external
        ipfs_gateway: preferred IPFS gateway
        ipfs_fallback_gateways: gateways tried after the preferred one, in order
        usertag_url_fn: builds the URL for an @mention
        hashtag_url_fn: builds the URL for a #hashtag
        additional_frontends: extra sibling front-end domains to recognize
        convert_hive_urls: rewrite sibling front-end post links to internal links
        internal_url_prefix: prefix for rewritten links
        assets_width: width of bounded media embeds
        assets_height: height of bounded media embeds
        image_proxy_fn: rewrites markdown image URLs (None uses the IPFS proxy)
        emoji: inline emoji settings
    """

    base_url: str = DEFAULT_BASE_URL
    ipfs_gateway: str = DEFAULT_IPFS_GATEWAY
    ipfs_fallback_gateways: tuple[str, ...] = DEFAULT_IPFS_FALLBACKS
    usertag_url_fn: Callable[[str], str] = default_usertag_url
    hashtag_url_fn: Callable[[str], str] = default_hashtag_url
    additional_frontends: tuple[str, ...] = ()
    convert_hive_urls: bool = True
    internal_url_prefix: str = ""
    assets_width: int = 540
    assets_height: int = 380
    image_proxy_fn: Optional[Callable[[str], str]] = None
    emoji: EmojiOptions = field(default_factory=EmojiOptions)

    @property
    def gateways(self) -> list[str]:
        """primary gateway followed by fallbacks, normalized and deduplicated."""
        result: list[str] = []
        for gateway in (self.ipfs_gateway, *self.ipfs_fallback_gateways):
            normalized = gateway.strip().rstrip("/")
            if normalized and normalized not in result:
                result.append(normalized)
        return result

    @property
    def frontends(self) -> list[str]:
        """default sibling front-ends plus any configured extras."""
        result = list(DEFAULT_HIVE_FRONTENDS)
        for domain in self.additional_frontends:
            normalized = domain.strip().lower()
            if normalized and normalized not in result:
                result.append(normalized)
        return result
