"""shared rendering utilities."""

from hivecontent.renderer.utils.emoji import substitute_emoji
from hivecontent.renderer.utils.markdown import create_markdown, markdown_to_html
from hivecontent.renderer.utils.repair import repair_center_tags
from hivecontent.renderer.utils.sanitize import sanitize_html

__all__ = [
    "create_markdown",
    "markdown_to_html",
    "repair_center_tags",
    "sanitize_html",
    "substitute_emoji",
]
