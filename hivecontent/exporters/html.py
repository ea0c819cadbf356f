"""HTML file exporter for rendered posts."""

import html as html_lib
import logging
import re
from pathlib import Path
from typing import Optional

from hivecontent.core.models import Post
from hivecontent.exporters.base import Exporter
from hivecontent.renderer import HiveRenderer, RenderContext, create_renderer

logger = logging.getLogger(__name__)

WRITTEN = "written"
SKIPPED = "skipped"
DRY_RUN = "dry-run"


def output_filename(post: Post) -> str:
    """builds a filesystem-safe file name from author and permlink."""
    safe = re.sub(r"[^\w.-]", "_", post.slug).strip("._") or "post"
    return f"{safe}.html"


class HTMLExporter(Exporter):  # pylint: disable=too-few-public-methods
    """renders posts and writes each one as a standalone HTML document."""

    def __init__(self, renderer: Optional[HiveRenderer] = None) -> None:
        self.renderer = renderer or create_renderer()

    def export(
        self,
        post: Post,
        destination: str,
        dry_run: bool = False,
        overwrite: bool = False,
    ) -> str:
        """renders post and writes <destination>/<author>-<permlink>.html."""
        output_path = Path(destination) / output_filename(post)

        if dry_run:
            logger.info("Would write to: %s", output_path)
            return DRY_RUN

        if output_path.exists() and not overwrite:
            logger.info("Skipping existing file: %s", output_path)
            return SKIPPED

        html_content = self.generate_html(post)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html_content, encoding="utf-8")
        logger.debug("Wrote %s", output_path)
        return WRITTEN

    def generate_html(self, post: Post) -> str:
        """renders the post body and wraps it in a document."""
        # the author owns :name: emoji tokens in their own post
        body = self.renderer.render(post.body, RenderContext(default_emoji_owner=post.author or None))
        title_escaped = html_lib.escape(post.title or post.permlink)
        byline = (
            f'\n    <p class="byline">@{html_lib.escape(post.author)}</p>' if post.author else ""
        )

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title_escaped}</title>
</head>
<body>
    <h1>{title_escaped}</h1>{byline}
    <article class="post-body">
{body}
    </article>
</body>
</html>
"""
