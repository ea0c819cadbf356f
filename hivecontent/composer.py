"""builders for the Hive operations that carry post content.

Operations are returned as ``[name, payload]`` pairs ready for any signing
library; nothing here signs or broadcasts.
"""

import json
import re
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import parse_qs, urlparse

from hivecontent.core.models import Beneficiary, CommentInput, ComposerResult, ValidationResult

DEFAULT_APP_NAME = "hivecontent"
DEFAULT_MAX_ACCEPTED_PAYOUT = "1000000.000 HBD"
DEFAULT_PERCENT_HBD = 10000

MAX_PERMLINK_LENGTH = 255
MAX_BODY_BYTES = 65536

HASHTAG_PATTERN = re.compile(r"#(\w+)")
MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[.*?\]\((https?://[^\s)]+)\)")
HTML_IMAGE_PATTERN = re.compile(r"<img[^>]+src=[\"']([^\"']+)[\"']", re.IGNORECASE)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_permlink(now: Optional[datetime] = None) -> str:
    """
    generates a permlink from a UTC timestamp.

    Args:
        now: timestamp to use (current time when omitted)

    Returns:
        e.g. "20261017t093015123z" for 2026-10-17T09:30:15.123Z
    """
    now = (now or _utcnow()).astimezone(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return re.sub(r"[^a-zA-Z0-9]", "", iso).lower()


def permlink_from_title(title: str, now: Optional[datetime] = None) -> str:
    """
    builds a readable permlink from a post title.

    The slug is lowercase with hyphens and gets the last six digits of the
    millisecond timestamp as suffix. Empty titles give "post-<milliseconds>".

    Args:
        title: post title
        now: timestamp for the suffix (current time when omitted)

    Returns:
        permlink of at most 255 characters
    """
    now = now or _utcnow()
    millis = str(int(now.timestamp()) * 1000 + now.microsecond // 1000)
    if not title or not title.strip():
        return f"post-{millis}"

    slug = title.lower().strip()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug).strip("-")

    suffix = millis[-6:]
    permlink = f"{slug}-{suffix}"
    if len(permlink) > MAX_PERMLINK_LENGTH:
        permlink = f"{permlink[:MAX_PERMLINK_LENGTH - len(suffix) - 1]}-{suffix}"
    return permlink


def extract_hashtags(text: str) -> list[str]:
    """returns hashtags in order of appearance, without the #."""
    return HASHTAG_PATTERN.findall(text)


def extract_image_urls(markdown: str) -> list[str]:
    """returns markdown image URLs followed by HTML <img> sources."""
    return MARKDOWN_IMAGE_PATTERN.findall(markdown) + HTML_IMAGE_PATTERN.findall(markdown)


def image_to_markdown(url: str) -> str:
    return f"![image]({url})"


def images_to_markdown(urls: list[str]) -> str:
    return "\n".join(image_to_markdown(url) for url in urls)


def append_media_to_body(
    body: str,
    images: Optional[list[str]] = None,
    gif_url: Optional[str] = None,
    video_embed_url: Optional[str] = None,
    audio_embed_url: Optional[str] = None,
) -> str:
    """
    appends media to a post body, each block separated by a blank line.

    Order is video, audio, images, then GIF.
    """
    result = body
    if video_embed_url:
        result += f"\n\n{video_embed_url}"
    if audio_embed_url:
        result += f"\n\n{audio_embed_url}"
    if images:
        result += f"\n\n{images_to_markdown(images)}"
    if gif_url:
        result += f"\n\n![gif]({gif_url})"
    return result


def build_comment_operation(
    parent_author: str,
    parent_permlink: str,
    author: str,
    permlink: str,
    title: str,
    body: str,
    metadata: dict[str, Any],
) -> list[Any]:
    """builds a comment operation; json_metadata is serialized compactly."""
    return [
        "comment",
        {
            "parent_author": parent_author,
            "parent_permlink": parent_permlink,
            "author": author,
            "permlink": permlink,
            "title": title,
            "body": body,
            "json_metadata": json.dumps(metadata, separators=(",", ":"), ensure_ascii=False),
        },
    ]


def build_comment_options_operation(
    author: str,
    permlink: str,
    max_accepted_payout: Optional[str] = None,
    percent_hbd: Optional[int] = None,
    allow_votes: Optional[bool] = None,
    allow_curation_rewards: Optional[bool] = None,
    beneficiaries: Optional[list[Beneficiary]] = None,
) -> list[Any]:
    """
    builds a comment_options operation.

    Beneficiaries are sorted by account, as the chain requires.

    Args:
        author: post author
        permlink: post permlink
        max_accepted_payout: defaults to "1000000.000 HBD"
        percent_hbd: defaults to 10000
        allow_votes: defaults to True
        allow_curation_rewards: defaults to True
        beneficiaries: reward recipients

    Returns:
        the operation pair
    """
    extensions: list[Any] = []
    if beneficiaries:
        ordered = sorted(beneficiaries, key=lambda b: b.account)
        extensions.append([0, {"beneficiaries": [asdict(b) for b in ordered]}])

    return [
        "comment_options",
        {
            "author": author,
            "permlink": permlink,
            "max_accepted_payout": (
                DEFAULT_MAX_ACCEPTED_PAYOUT if max_accepted_payout is None else max_accepted_payout
            ),
            "percent_hbd": DEFAULT_PERCENT_HBD if percent_hbd is None else percent_hbd,
            "allow_votes": True if allow_votes is None else allow_votes,
            "allow_curation_rewards": (
                True if allow_curation_rewards is None else allow_curation_rewards
            ),
            "extensions": extensions,
        },
    ]


class Composer:  # pylint: disable=too-few-public-methods
    """builds post operations with application defaults."""

    def __init__(
        self,
        app_name: str = DEFAULT_APP_NAME,
        default_tags: Optional[list[str]] = None,
        beneficiaries: Optional[list[Beneficiary]] = None,
    ) -> None:
        self.app_name = app_name
        self.default_tags = list(default_tags or [])
        self.beneficiaries = list(beneficiaries or [])

    def build(self, comment: CommentInput) -> ComposerResult:
        """
        builds the comment operation and, when needed, comment_options.

        comment_options is emitted only with beneficiaries (explicit or
        default) or an explicit payout setting.

        Args:
            comment: post input

        Returns:
            operations with the final permlink, body and metadata
        """
        permlink = comment.permlink or generate_permlink()
        body = append_media_to_body(
            comment.body,
            images=comment.images,
            gif_url=comment.gif_url,
            video_embed_url=comment.video_embed_url,
            audio_embed_url=comment.audio_embed_url,
        )

        tags: list[str] = []
        for tag in [*self.default_tags, *(comment.tags or []), *extract_hashtags(body)]:
            if tag not in tags:
                tags.append(tag)

        metadata: dict[str, Any] = {"app": self.app_name, "tags": tags}
        if comment.images:
            metadata["images"] = list(comment.images)
        metadata.update(comment.metadata or {})

        operations = [
            build_comment_operation(
                parent_author=comment.parent_author,
                parent_permlink=comment.parent_permlink,
                author=comment.author,
                permlink=permlink,
                title=comment.title or "",
                body=body,
                metadata=metadata,
            )
        ]

        beneficiaries = (
            comment.beneficiaries if comment.beneficiaries is not None else self.beneficiaries
        )
        custom_payout = any(
            value is not None
            for value in (
                comment.max_accepted_payout,
                comment.percent_hbd,
                comment.allow_votes,
                comment.allow_curation_rewards,
            )
        )
        if beneficiaries or custom_payout:
            operations.append(
                build_comment_options_operation(
                    author=comment.author,
                    permlink=permlink,
                    max_accepted_payout=comment.max_accepted_payout,
                    percent_hbd=comment.percent_hbd,
                    allow_votes=comment.allow_votes,
                    allow_curation_rewards=comment.allow_curation_rewards,
                    beneficiaries=beneficiaries or None,
                )
            )

        return ComposerResult(operations=operations, permlink=permlink, body=body, metadata=metadata)


def validate_title(title: str) -> ValidationResult:
    """checks a post title is 3-255 characters."""
    if not title or not title.strip():
        return ValidationResult(False, "Title is required")
    if len(title) < 3:
        return ValidationResult(False, "Title must be at least 3 characters")
    if len(title) > MAX_PERMLINK_LENGTH:
        return ValidationResult(False, "Title must be less than 255 characters")
    return ValidationResult(True)


def validate_content(markdown: str) -> ValidationResult:
    """checks a post body is at least 10 characters and at most 64 KiB of UTF-8."""
    if not markdown or not markdown.strip():
        return ValidationResult(False, "Post content is required")
    if len(markdown) < 10:
        return ValidationResult(False, "Post content is too short")
    if len(markdown.encode("utf-8")) > MAX_BODY_BYTES:
        return ValidationResult(False, "Post content is too large (max 64KB)")
    return ValidationResult(True)


def _id_from_query(url: str, param: str) -> Optional[str]:
    """returns the permlink part of an "owner/permlink" query parameter."""
    values = parse_qs(urlparse(url).query).get(param)
    if not values:
        return None
    parts = values[0].split("/")
    return parts[1] if len(parts) > 1 else None


def extract_video_id_from_embed_url(embed_url: str) -> Optional[str]:
    """extracts "abc123" from https://play.3speak.tv/embed?v=owner/abc123."""
    return _id_from_query(embed_url, "v")


def extract_audio_id_from_play_url(play_url: str) -> Optional[str]:
    """extracts "abc123" from https://audio.3speak.tv/play?a=owner/abc123."""
    return _id_from_query(play_url, "a")
