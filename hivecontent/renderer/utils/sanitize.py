"""allow-list HTML sanitization (final render stage)."""

import nh3

# never allowed, whatever else changes in ALLOWED_TAGS
FORBIDDEN_TAGS = frozenset(
    {
        "script",
        "style",
        "form",
        "input",
        "button",
        "textarea",
        "select",
        "dialog",
        "object",
        "embed",
        "applet",
        "base",
        "link",
        "meta",
    }
)

ALLOWED_TAGS = {
    # text formatting
    "p",
    "br",
    "span",
    "div",
    "blockquote",
    "pre",
    "code",
    "strong",
    "em",
    "b",
    "i",
    "u",
    "ins",
    "del",
    "s",
    "strike",
    "mark",
    "sub",
    "sup",
    "small",
    # headings
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    # lists
    "ul",
    "ol",
    "li",
    "dl",
    "dt",
    "dd",
    # tables
    "table",
    "thead",
    "tbody",
    "tfoot",
    "tr",
    "th",
    "td",
    "caption",
    "col",
    "colgroup",
    # links and media
    "a",
    "img",
    "video",
    "source",
    "audio",
    "iframe",
    # other
    "hr",
    "center",
    "details",
    "summary",
} - FORBIDDEN_TAGS

# applies to every allowed tag; no on* handler is ever listed
GENERIC_ATTRIBUTES = {
    "href",
    "src",
    "alt",
    "title",
    "width",
    "height",
    "class",
    "id",
    "style",
    "target",
    "rel",
    "controls",
    "muted",
    "preload",
    "loading",
    "autoplay",
    "loop",
    "type",
    "allowfullscreen",
    "frameborder",
    "allow",
    "scrolling",
    "colspan",
    "rowspan",
    "align",
    "valign",
    "start",
    "reversed",
    "data-dnt",
    "data-theme",
    "allowtransparency",
    # emoji markup
    "role",
    "aria-label",
    "decoding",
}

ALLOWED_ATTRIBUTES = {"*": {a for a in GENERIC_ATTRIBUTES if not a.startswith("on")}}

ALLOWED_URL_SCHEMES = {
    "http",
    "https",
    "mailto",
    "tel",
    "callto",
    "sms",
    "cid",
    "xmpp",
    "ipfs",
}


def sanitize_html(html: str) -> str:
    """
    strips every tag, attribute and URL scheme not on the allow-lists.

    Disallowed wrappers are removed but their text is kept; only script and
    style bodies are dropped. Relative and fragment URLs pass through.

    Args:
        html: untrusted HTML

    Returns:
        sanitized HTML
    """
    if not html:
        return ""
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        clean_content_tags={"script", "style"},
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_URL_SCHEMES,
        strip_comments=True,
        link_rel=None,
    )
