"""Hive markdown renderer."""

from hivecontent.core.config import EmojiOptions, RendererOptions
from hivecontent.renderer.pipeline import HiveRenderer, RenderContext, create_renderer
from hivecontent.renderer.transformers import EmbedLedger, apply_transformer
from hivecontent.renderer.transformers.frontends import normalize_frontend_links
from hivecontent.renderer.utils import (
    markdown_to_html,
    repair_center_tags,
    sanitize_html,
    substitute_emoji,
)

# default renderer instance
render_markdown = create_renderer()

__all__ = [
    "EmbedLedger",
    "EmojiOptions",
    "HiveRenderer",
    "RenderContext",
    "RendererOptions",
    "apply_transformer",
    "create_renderer",
    "markdown_to_html",
    "normalize_frontend_links",
    "render_markdown",
    "repair_center_tags",
    "sanitize_html",
    "substitute_emoji",
]
