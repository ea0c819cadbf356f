"""3Speak video and audio link embeds."""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.transformers import EmbedLedger, transformer
from hivecontent.renderer.utils.dom import new_tag

logger = logging.getLogger(__name__)

# legacy 3speak.tv watch links embed through the play. subdomain
VIDEO_PATTERNS = (
    (re.compile(r"^https?://3speak\.tv/watch\?v=([^&\"#\s]+)"), "watch"),
    (re.compile(r"^https?://play\.3speak\.tv/watch\?v=([^&\"#\s]+)"), "watch"),
    (re.compile(r"^https?://play\.3speak\.tv/embed\?v=([^&\"#\s]+)"), "embed"),
)
AUDIO_PATTERN = re.compile(r"^https?://audio\.3speak\.tv/play\?a=([^&\"#\s]+)")


def _match_video(href: str) -> Optional[tuple[str, str]]:
    """returns (video id, player path) for a 3Speak video link."""
    for pattern, path in VIDEO_PATTERNS:
        match = pattern.match(href)
        if match:
            return match.group(1), path
    return None


def video_embed(soup: BeautifulSoup, video_id: str, path: str = "watch") -> Tag:
    """builds the iframe container for a 3Speak video."""
    iframe = new_tag(
        soup,
        "iframe",
        {
            "src": f"https://play.3speak.tv/{path}?v={video_id}&mode=iframe",
            "allowfullscreen": "",
            "loading": "lazy",
        },
    )
    return new_tag(soup, "div", {"class": "video-container"}, [iframe])


def audio_embed(soup: BeautifulSoup, audio_id: str) -> Tag:
    """builds the iframe container for a 3Speak audio clip."""
    iframe = new_tag(
        soup,
        "iframe",
        {"src": f"https://audio.3speak.tv/play?a={audio_id}", "loading": "lazy"},
    )
    return new_tag(soup, "div", {"class": "audio-container"}, [iframe])


@transformer("threespeak", order=20)
class ThreeSpeakTransformer:  # pylint: disable=too-few-public-methods
    """replaces 3Speak watch, embed and audio links with player iframes."""

    def apply(self, soup: BeautifulSoup, _options: RendererOptions, ledger: EmbedLedger) -> int:
        """
        embeds the first link to each video or audio id.

        Args:
            soup: parsed document
            _options: rendering profile (unused)
            ledger: call-scoped dedup state

        Returns:
            number of links replaced
        """
        replaced = 0

        for anchor in soup.find_all("a", href=True):
            href = anchor["href"].strip()

            video = _match_video(href)
            if video:
                video_id, path = video
                if ledger.claim("3speak-video", video_id):
                    anchor.replace_with(video_embed(soup, video_id, path))
                    replaced += 1
                continue

            audio = AUDIO_PATTERN.match(href)
            if audio and ledger.claim("3speak-audio", audio.group(1)):
                anchor.replace_with(audio_embed(soup, audio.group(1)))
                replaced += 1

        if replaced:
            logger.debug("embedded %d 3Speak links", replaced)
        return replaced
