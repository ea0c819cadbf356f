"""transformer registry and base types for embed and link rewriting."""

import logging
from typing import Callable, Optional, Protocol, TypeVar

from bs4 import BeautifulSoup

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.utils.dom import parse_html, serialize

logger = logging.getLogger(__name__)


class EmbedLedger:
    """
    ids already embedded during one render call.

    Keyed by resource kind so a video and an audio with the same id do not
    collide. A fresh ledger is created for every render.
    """

    def __init__(self) -> None:
        self._seen: dict[str, set[str]] = {}

    def claim(self, kind: str, resource_id: str) -> bool:
        """
        records an id for a kind.

        Returns:
            True on first occurrence, False for a duplicate
        """
        seen = self._seen.setdefault(kind, set())
        if resource_id in seen:
            return False
        seen.add(resource_id)
        return True

    def count(self, kind: str) -> int:
        """number of distinct ids claimed for a kind."""
        return len(self._seen.get(kind, ()))


class Transformer(Protocol):  # pylint: disable=too-few-public-methods
    """protocol for document transformers."""

    name: str
    order: int
    requires: Optional[str]

    def apply(self, soup: BeautifulSoup, options: RendererOptions, ledger: EmbedLedger) -> int:
        """rewrites the document in place, returns the number of rewrites."""


class TransformerRegistry:
    """registry for document transformers, run in ascending order."""

    def __init__(self) -> None:
        self._transformers: dict[str, Transformer] = {}

    def register(self, transformer_instance: Transformer) -> None:
        """registers a transformer under its name."""
        self._transformers[transformer_instance.name] = transformer_instance

    def get(self, name: str) -> Optional[Transformer]:
        """returns the transformer registered under name."""
        return self._transformers.get(name)

    def ordered(self) -> list[Transformer]:
        """returns all transformers sorted by order."""
        return sorted(self._transformers.values(), key=lambda t: t.order)

    def run(
        self,
        soup: BeautifulSoup,
        options: RendererOptions,
        ledger: Optional[EmbedLedger] = None,
    ) -> dict[str, int]:
        """
        runs every enabled transformer over one parsed document.

        A transformer that raises is logged and skipped; the rest still run.

        Args:
            soup: parsed document, mutated in place
            options: rendering profile
            ledger: call-scoped dedup state (a fresh one when omitted)

        Returns:
            rewrite counts by transformer name
        """
        ledger = ledger or EmbedLedger()
        counts: dict[str, int] = {}

        for transformer_instance in self.ordered():
            if transformer_instance.requires and not getattr(
                options, transformer_instance.requires
            ):
                continue
            try:
                counts[transformer_instance.name] = transformer_instance.apply(
                    soup, options, ledger
                )
            except Exception:  # pylint: disable=broad-exception-caught
                logger.warning(
                    "transformer %s failed, continuing without it",
                    transformer_instance.name,
                    exc_info=True,
                )

        return counts


# global registry
registry = TransformerRegistry()

T = TypeVar("T")


def transformer(
    name: str,
    order: int,
    requires: Optional[str] = None,
    target_registry: TransformerRegistry = registry,
) -> Callable[[type[T]], type[T]]:
    """
    decorator to register a document transformer.

    Args:
        name: unique transformer name
        order: position in the chain (lower runs first)
        requires: RendererOptions attribute that must be truthy to run
        target_registry: registry to register with (defaults to global)

    Returns:
        decorator function
    """

    def decorator(cls: type[T]) -> type[T]:
        cls.name = name  # type: ignore[attr-defined]
        cls.order = order  # type: ignore[attr-defined]
        cls.requires = requires  # type: ignore[attr-defined]
        target_registry.register(cls())  # type: ignore[arg-type]
        return cls

    return decorator


def apply_transformer(
    html: str,
    name: str,
    options: Optional[RendererOptions] = None,
    ledger: Optional[EmbedLedger] = None,
) -> str:
    """
    runs a single registered transformer over an HTML string.

    Args:
        html: HTML fragment
        name: registered transformer name
        options: rendering profile (defaults used when omitted)
        ledger: dedup state to share with other calls

    Returns:
        rewritten HTML, or the input unchanged when nothing was rewritten
    """
    transformer_instance = registry.get(name)
    if transformer_instance is None:
        raise KeyError(f"unknown transformer: {name}")
    if not html:
        return html

    options = options or RendererOptions()
    soup = parse_html(html)
    if not transformer_instance.apply(soup, options, ledger or EmbedLedger()):
        return html
    return serialize(soup)


# import transformer modules to trigger registration
# pylint: disable=wrong-import-position,unused-import
from hivecontent.renderer.transformers import (  # noqa: E402,F401
    frontends,
    ipfs,
    social,
    threespeak,
)
