"""markdown to HTML conversion with Hive conventions."""

import re
from typing import Any, Callable, Optional, cast
from urllib.parse import urlparse

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml

from hivecontent.core.config import RendererOptions

# @mentions follow Hive account rules: lowercase, 3-16 chars, no trailing dot/dash
# #hashtags must start with a letter so "#1" and HTML entities stay text
TAG_PATTERN = re.compile(
    r"(?<![\w@/.#&])@(?P<user>[a-z][a-z0-9.-]{1,14}[a-z0-9])(?![\w-])"
    r"|(?<![\w#&/])#(?P<tag>[a-zA-Z][a-zA-Z0-9-]{0,31})(?![\w-])"
)
RAW_LINK_OPEN = re.compile(r"<a[\s>]", re.IGNORECASE)
RAW_LINK_CLOSE = re.compile(r"</a\s*>", re.IGNORECASE)


def proxy_ipfs_image(url: str) -> str:
    """
    default image proxy: serves /ipfs/ paths from the public ipfs.io gateway.

    Args:
        url: image URL from the markdown source

    Returns:
        proxied URL, or the input when it is not an IPFS path
    """
    if "ipfs" in url:
        _, _, rest = url.partition("/ipfs/")
        if rest:
            return f"https://ipfs.io/ipfs/{rest}"
    return url


def _inside_link(tokens: Any, idx: int) -> bool:
    """checks if inline token idx sits inside a markdown or raw HTML link."""
    depth = 0
    for token in tokens[:idx]:
        if token.type == "link_open":
            depth += 1
        elif token.type == "link_close":
            depth -= 1
        elif token.type == "html_inline":
            if RAW_LINK_OPEN.match(token.content):
                depth += 1
            elif RAW_LINK_CLOSE.match(token.content):
                depth -= 1
    return depth > 0


def link_tags(
    text: str,
    usertag_url_fn: Callable[[str], str],
    hashtag_url_fn: Callable[[str], str],
) -> str:
    """
    escapes text and turns @mentions and #hashtags into links.

    Args:
        text: raw text content
        usertag_url_fn: maps an account name to a URL
        hashtag_url_fn: maps a lowercase tag to a URL

    Returns:
        HTML-safe text with mention/hashtag anchors
    """
    parts = []
    last = 0
    for match in TAG_PATTERN.finditer(text):
        parts.append(escapeHtml(text[last : match.start()]))
        user = match.group("user")
        url = usertag_url_fn(user) if user else hashtag_url_fn(match.group("tag").lower())
        parts.append(f'<a href="{escapeHtml(url)}">{escapeHtml(match.group(0))}</a>')
        last = match.end()
    parts.append(escapeHtml(text[last:]))
    return "".join(parts)


def create_markdown(options: RendererOptions) -> MarkdownIt:
    """
    builds a markdown-it instance configured for Hive content.

    Raw HTML is passed through: Hive posts routinely embed it and the
    sanitizer runs on the final output.

    Args:
        options: rendering profile

    Returns:
        configured MarkdownIt instance
    """
    md = MarkdownIt("commonmark", {"breaks": True, "linkify": True, "html": True})
    md.enable(["linkify", "table", "strikethrough"])

    base_host = urlparse(options.base_url).netloc.lower()
    image_proxy = options.image_proxy_fn or proxy_ipfs_image

    renderer: Any = md.renderer

    def render_link_open(tokens: Any, idx: int, opts: Any, env: Any) -> str:
        token = tokens[idx]
        href = urlparse(token.attrGet("href") or "")
        host = href.netloc.lower()
        if href.scheme in ("http", "https") and host not in (base_host, f"www.{base_host}"):
            token.attrSet("rel", "nofollow noopener")
            token.attrJoin("class", "link-external")
        return cast(str, renderer.renderToken(tokens, idx, opts, env))

    renderer.rules["link_open"] = render_link_open

    def render_image(tokens: Any, idx: int, opts: Any, env: Any) -> str:
        token = tokens[idx]
        src = image_proxy(token.attrGet("src") or "")
        alt = renderer.renderInlineAsText(token.children or [], opts, env)
        title = token.attrGet("title")
        title_attr = f' title="{escapeHtml(title)}"' if title else ""
        return f'<img src="{escapeHtml(src)}" alt="{escapeHtml(alt)}"{title_attr} />'

    renderer.rules["image"] = render_image

    def render_text(tokens: Any, idx: int, _opts: Any, _env: Any) -> str:
        content = tokens[idx].content
        if _inside_link(tokens, idx):
            return cast(str, escapeHtml(content))
        return link_tags(content, options.usertag_url_fn, options.hashtag_url_fn)

    renderer.rules["text"] = render_text

    return md


def markdown_to_html(text: str, options: Optional[RendererOptions] = None) -> str:
    """
    converts markdown to HTML (render stage 1 only, nothing sanitized).

    Args:
        text: markdown text
        options: rendering profile (defaults used when omitted)

    Returns:
        raw HTML
    """
    md = create_markdown(options or RendererOptions())
    return cast(str, md.render(text))
