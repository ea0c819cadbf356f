"""Tests for rendering configuration."""

import dataclasses

import pytest

from hivecontent.core.config import (
    DEFAULT_HIVE_FRONTENDS,
    EmojiOptions,
    RendererOptions,
    default_hashtag_url,
    default_usertag_url,
)


def test_defaults() -> None:
    """default profile values."""
    options = RendererOptions()

    assert options.base_url == "https://hive.blog/"
    assert options.convert_hive_urls is True
    assert (options.assets_width, options.assets_height) == (540, 380)
    assert options.emoji == EmojiOptions()
    assert options.emoji.enabled is False


def test_gateways_normalized_and_deduplicated() -> None:
    """the primary gateway comes first; slashes and duplicates are dropped."""
    options = RendererOptions(
        ipfs_gateway="https://a.example/",
        ipfs_fallback_gateways=("https://b.example", "https://a.example", " "),
    )

    assert options.gateways == ["https://a.example", "https://b.example"]


def test_frontends_extended() -> None:
    """extra front-ends are appended in lower case."""
    options = RendererOptions(additional_frontends=("MyApp.IO", "peakd.com"))

    assert options.frontends == [*DEFAULT_HIVE_FRONTENDS, "myapp.io"]


def test_default_url_functions() -> None:
    """mentions go to profiles and tags to trending pages."""
    assert default_usertag_url("alice") == "/@alice"
    assert default_hashtag_url("hive") == "/trending/hive"


def test_options_are_frozen() -> None:
    """profiles cannot change after construction."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        RendererOptions().base_url = "x"  # type: ignore[misc]
