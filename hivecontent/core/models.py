"""Data models for Hive posts, editor buffers and composed operations."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Post:
    """A Hive post or comment as found in exports."""

    author: str
    permlink: str
    body: str
    title: str = ""
    json_metadata: Optional[dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.json_metadata is None:
            self.json_metadata = {}

    @property
    def slug(self) -> str:
        """file-friendly identifier: author-permlink."""
        return f"{self.author}-{self.permlink}" if self.author else self.permlink


@dataclass(frozen=True)
class TextSelection:
    """Selection range in a text buffer (0-indexed, end exclusive)."""

    start: int
    end: int


@dataclass(frozen=True)
class InsertResult:
    """Result of a markdown edit operation."""

    text: str
    cursor_position: int
    selection: Optional[TextSelection] = None


@dataclass(frozen=True)
class Beneficiary:
    """Reward recipient; weight in basis points (100 = 1%)."""

    account: str
    weight: int


@dataclass
class CommentInput:  # pylint: disable=too-many-instance-attributes
    """Input for building a comment/post operation."""

    author: str
    body: str
    parent_author: str
    parent_permlink: str
    permlink: Optional[str] = None
    title: Optional[str] = None
    images: Optional[list[str]] = None
    gif_url: Optional[str] = None
    video_embed_url: Optional[str] = None
    audio_embed_url: Optional[str] = None
    tags: Optional[list[str]] = None
    metadata: Optional[dict[str, Any]] = None
    beneficiaries: Optional[list[Beneficiary]] = None
    max_accepted_payout: Optional[str] = None
    percent_hbd: Optional[int] = None
    allow_votes: Optional[bool] = None
    allow_curation_rewards: Optional[bool] = None


@dataclass
class ComposerResult:
    """Operations ready to broadcast, plus the values they were built from."""

    operations: list[list[Any]]
    permlink: str
    body: str
    metadata: dict[str, Any]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a title/body check."""

    valid: bool
    error: Optional[str] = None
