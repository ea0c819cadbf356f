"""Hive markdown render pipeline."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.transformers import EmbedLedger, TransformerRegistry, registry
from hivecontent.renderer.utils.dom import parse_html, serialize
from hivecontent.renderer.utils.emoji import substitute_emoji
from hivecontent.renderer.utils.markdown import create_markdown
from hivecontent.renderer.utils.repair import repair_center_tags
from hivecontent.renderer.utils.sanitize import sanitize_html

logger = logging.getLogger(__name__)

S = TypeVar("S")


@dataclass
class RenderContext:
    """per-call rendering context."""

    default_emoji_owner: Optional[str] = None


def _guarded(stage: str, func: Callable[[S], S], value: S) -> S:
    """runs one stage; on failure logs it and passes the input through."""
    try:
        return func(value)
    except Exception:  # pylint: disable=broad-exception-caught
        logger.warning("render stage %s failed, passing input through", stage, exc_info=True)
        return value


class HiveRenderer:
    """
    renders Hive markdown to sanitized HTML.

    Construct once per rendering profile and reuse; render calls share no
    mutable state.
    """

    def __init__(
        self,
        options: Optional[RendererOptions] = None,
        transformers: TransformerRegistry = registry,
    ) -> None:
        self.options = options or RendererOptions()
        self.transformers = transformers
        self._md = create_markdown(self.options)

    def __call__(self, markdown: str, context: Optional[RenderContext] = None) -> str:
        return self.render(markdown, context)

    def render(self, markdown: str, context: Optional[RenderContext] = None) -> str:
        """
        renders markdown through every pipeline stage.

        Stages are markdown conversion, center-tag repair, embed and link
        rewriting on a single parsed document, sanitization, and optional
        emoji substitution followed by a second sanitization.

        Args:
            markdown: author-supplied markdown
            context: per-call options (emoji owner)

        Returns:
            sanitized HTML ("" for empty input)
        """
        if not markdown:
            return ""

        html = _guarded("markdown", self._md.render, markdown)
        html = _guarded("repair", repair_center_tags, html)
        html = _guarded("transform", self._transform, html)

        html = sanitize_html(html)

        emoji = self.options.emoji
        if emoji.enabled:
            owner = (context.default_emoji_owner if context else None) or emoji.default_owner
            html = _guarded(
                "emoji", lambda h: substitute_emoji(h, emoji.base_url, owner), html
            )
            html = sanitize_html(html)

        return html

    def _transform(self, html: str) -> str:
        """parses once, runs the transformer chain, serializes once."""
        soup = parse_html(html)
        counts = self.transformers.run(soup, self.options, EmbedLedger())
        if not any(counts.values()):
            return html
        logger.debug("transformer rewrites: %s", counts)
        return serialize(soup)


def create_renderer(options: Optional[RendererOptions] = None, **overrides: Any) -> HiveRenderer:
    """
    creates a renderer for a profile.

    Args:
        options: base profile (defaults when omitted)
        **overrides: RendererOptions fields replacing those of options

    Returns:
        configured HiveRenderer
    """
    base = options or RendererOptions()
    if overrides:
        base = dataclasses.replace(base, **overrides)
    return HiveRenderer(base)
