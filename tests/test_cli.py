"""tests for CLI argument parsing."""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from hivecontent import build_options, main


def _args(**overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {
        "no_convert_urls": False,
        "url_prefix": "",
        "frontend": [],
        "gateway": [],
        "emoji": False,
        "emoji_owner": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_cli_requires_source_argument() -> None:
    """CLI requires source argument."""
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2  # argparse exits with 2 for missing args


def test_cli_accepts_source_only() -> None:
    """CLI accepts source as only positional argument, output defaults to html."""
    result = main(["nonexistent.json"])
    assert result == 2  # fatal error (file not found)


def test_cli_accepts_source_and_output() -> None:
    """CLI accepts source and output as positional arguments."""
    result = main(["nonexistent.json", "out"])
    assert result == 2


@pytest.mark.parametrize(
    "flags",
    [
        ["--dry-run"],
        ["--overwrite"],
        ["--emoji"],
        ["--emoji-owner", "alice"],
        ["--no-convert-urls"],
        ["--url-prefix", "/posts"],
        ["--gateway", "https://ipfs.io/ipfs/", "--gateway", "https://dweb.link/ipfs/"],
        ["--frontend", "example.blog"],
        ["--author", "alice"],
        ["-q"],
        ["--progress"],
        ["-v"],
        ["--verbose"],
    ],
)
def test_cli_accepts_flags(flags: list[str]) -> None:
    """CLI accepts every documented flag."""
    result = main(["nonexistent.json", *flags])
    assert result == 2


def test_cli_renders_directory(tmp_path: Path) -> None:
    """CLI renders a directory of posts and exits 0."""
    source = tmp_path / "src"
    source.mkdir()
    (source / "post.json").write_text(
        json.dumps({"author": "alice", "permlink": "hello", "title": "Hello", "body": "Hi"}),
        encoding="utf-8",
    )
    output = tmp_path / "out"

    result = main([str(source), str(output), "-q"])

    assert result == 0
    assert (output / "alice-hello.html").exists()


def test_cli_returns_1_on_partial_failure(tmp_path: Path) -> None:
    """CLI exits 1 when some posts fail."""
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")

    assert main([str(tmp_path), str(tmp_path / "out"), "-q"]) == 1


def test_cli_returns_2_on_unexpected_error(tmp_path: Path) -> None:
    """unexpected errors are fatal."""
    with patch("hivecontent.render_posts", side_effect=RuntimeError("boom")):
        assert main([str(tmp_path)]) == 2


def test_build_options_defaults() -> None:
    """no flags keep the default profile."""
    options = build_options(_args())

    assert options.convert_hive_urls is True
    assert options.emoji.enabled is False
    assert options.additional_frontends == ()


def test_build_options_maps_flags() -> None:
    """flags override the profile."""
    options = build_options(
        _args(
            no_convert_urls=True,
            url_prefix="/posts",
            frontend=["example.blog"],
            gateway=["https://ipfs.io/ipfs/", "https://dweb.link/ipfs/"],
            emoji_owner="alice",
        )
    )

    assert options.convert_hive_urls is False
    assert options.internal_url_prefix == "/posts"
    assert options.additional_frontends == ("example.blog",)
    assert options.ipfs_gateway == "https://ipfs.io/ipfs/"
    assert options.ipfs_fallback_gateways == ("https://dweb.link/ipfs/",)
    assert options.emoji.enabled is True
    assert options.emoji.default_owner == "alice"
