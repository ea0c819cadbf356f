"""tests for the transformer registry."""

import logging

import pytest
from bs4 import BeautifulSoup

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.transformers import (
    EmbedLedger,
    TransformerRegistry,
    apply_transformer,
    registry,
    transformer,
)


def test_ledger_claims_first_occurrence_only() -> None:
    """claim returns True once per id and kind."""
    ledger = EmbedLedger()

    assert ledger.claim("video", "a") is True
    assert ledger.claim("video", "a") is False
    assert ledger.claim("audio", "a") is True
    assert ledger.count("video") == 1
    assert ledger.count("tweet") == 0


def test_transformer_decorator_registers_instance() -> None:
    """@transformer sets name, order and requires and registers an instance."""
    target = TransformerRegistry()

    @transformer("upper", order=5, requires="convert_hive_urls", target_registry=target)
    class UpperTransformer:  # pylint: disable=unused-variable,too-few-public-methods
        """test transformer."""

        def apply(self, _soup: BeautifulSoup, _options: RendererOptions, _ledger: EmbedLedger) -> int:
            """does nothing."""
            return 0

    registered = target.get("upper")
    assert registered is not None
    assert registered.order == 5
    assert registered.requires == "convert_hive_urls"


def test_registry_runs_in_order() -> None:
    """transformers run by ascending order regardless of registration order."""
    target = TransformerRegistry()
    calls: list[str] = []

    @transformer("second", order=20, target_registry=target)
    class Second:  # pylint: disable=unused-variable,too-few-public-methods
        """records its call."""

        def apply(self, _soup: BeautifulSoup, _options: RendererOptions, _ledger: EmbedLedger) -> int:
            """records its call."""
            calls.append("second")
            return 1

    @transformer("first", order=10, target_registry=target)
    class First:  # pylint: disable=unused-variable,too-few-public-methods
        """records its call."""

        def apply(self, _soup: BeautifulSoup, _options: RendererOptions, _ledger: EmbedLedger) -> int:
            """records its call."""
            calls.append("first")
            return 2

    counts = target.run(BeautifulSoup("<p>x</p>", "html.parser"), RendererOptions())

    assert calls == ["first", "second"]
    assert counts == {"first": 2, "second": 1}


def test_registry_skips_transformers_whose_option_is_off() -> None:
    """requires names an option that must be truthy."""
    target = TransformerRegistry()

    @transformer("links", order=1, requires="convert_hive_urls", target_registry=target)
    class Links:  # pylint: disable=unused-variable,too-few-public-methods
        """counts one rewrite."""

        def apply(self, _soup: BeautifulSoup, _options: RendererOptions, _ledger: EmbedLedger) -> int:
            """counts one rewrite."""
            return 1

    soup = BeautifulSoup("", "html.parser")

    assert target.run(soup, RendererOptions(convert_hive_urls=False)) == {}
    assert target.run(soup, RendererOptions()) == {"links": 1}


def test_registry_continues_after_failure(caplog: pytest.LogCaptureFixture) -> None:
    """a failing transformer is logged and the chain continues."""
    target = TransformerRegistry()

    @transformer("broken", order=1, target_registry=target)
    class Broken:  # pylint: disable=unused-variable,too-few-public-methods
        """always fails."""

        def apply(self, _soup: BeautifulSoup, _options: RendererOptions, _ledger: EmbedLedger) -> int:
            """always fails."""
            raise RuntimeError("boom")

    @transformer("working", order=2, target_registry=target)
    class Working:  # pylint: disable=unused-variable,too-few-public-methods
        """counts one rewrite."""

        def apply(self, _soup: BeautifulSoup, _options: RendererOptions, _ledger: EmbedLedger) -> int:
            """counts one rewrite."""
            return 1

    with caplog.at_level(logging.WARNING):
        counts = target.run(BeautifulSoup("", "html.parser"), RendererOptions())

    assert counts == {"working": 1}
    assert "transformer broken failed" in caplog.text


def test_global_registry_order() -> None:
    """built-in transformers run in the documented order."""
    names = [t.name for t in registry.ordered()]

    assert names == ["threespeak", "ipfs-video", "twitter", "instagram", "ipfs-link-guard", "hive-links"]


def test_apply_transformer_unknown_name() -> None:
    """unknown transformer names raise KeyError."""
    with pytest.raises(KeyError):
        apply_transformer("<p>x</p>", "nope")


def test_apply_transformer_no_match_returns_input() -> None:
    """input comes back byte-for-byte when nothing matches."""
    html = "<P>Plain   <b>text</b></P>"

    assert apply_transformer(html, "threespeak") == html
