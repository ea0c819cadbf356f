"""cursor-aware markdown edit operations.

Every operation takes the buffer and the current selection and returns the
new buffer with the cursor position (and optionally a selection) to restore.
Nothing is mutated in place.
"""

from typing import Callable, Optional

from hivecontent.core.models import InsertResult, TextSelection

COMMON_EMOJIS = {
    "reactions": ["😊", "😂", "❤️", "👍", "👎", "🔥", "💯", "🎉", "😍", "🤔"],
    "expressions": ["😢", "😎", "🙄", "😴", "🤗", "🤩", "😬", "😱", "🤯", "😇"],
    "symbols": ["🚀", "⭐", "💪", "👏", "🙌", "🤝", "💰", "📈", "📉", "💎"],
}

ALL_COMMON_EMOJIS = [emoji for group in COMMON_EMOJIS.values() for emoji in group]


def _check_selection(text: str, selection: TextSelection) -> None:
    """raises ValueError for a selection outside the buffer or reversed."""
    if selection.start < 0 or selection.end < selection.start or selection.end > len(text):
        raise ValueError(
            f"invalid selection {selection.start}-{selection.end} for text of length {len(text)}"
        )


def _replace_selection(text: str, selection: TextSelection, insert: str) -> InsertResult:
    """replaces the selection with insert and puts the cursor after it."""
    _check_selection(text, selection)
    new_text = text[: selection.start] + insert + text[selection.end :]
    return InsertResult(text=new_text, cursor_position=selection.start + len(insert))


def wrap_selection(text: str, selection: TextSelection, prefix: str, suffix: str) -> InsertResult:
    """
    wraps the selection with prefix and suffix.

    Args:
        text: buffer
        selection: current selection (may be empty)
        prefix: inserted before the selection
        suffix: inserted after the selection

    Returns:
        cursor after the suffix, selection over the wrapped text
    """
    _check_selection(text, selection)
    selected = text[selection.start : selection.end]
    new_text = text[: selection.start] + prefix + selected + suffix + text[selection.end :]
    inner_start = selection.start + len(prefix)
    return InsertResult(
        text=new_text,
        cursor_position=inner_start + len(selected) + len(suffix),
        selection=TextSelection(inner_start, inner_start + len(selected)),
    )


def insert_at_line_start(text: str, selection: TextSelection, prefix: str) -> InsertResult:
    """
    inserts prefix at the start of the line holding selection.start.

    Args:
        text: buffer
        selection: current selection
        prefix: line marker such as "> " or "## "

    Returns:
        cursor shifted by the prefix length
    """
    _check_selection(text, selection)
    line_start = text.rfind("\n", 0, selection.start) + 1
    new_text = text[:line_start] + prefix + text[line_start:]
    return InsertResult(text=new_text, cursor_position=selection.start + len(prefix))


def insert_bold(text: str, selection: TextSelection) -> InsertResult:
    """wraps the selection in **bold** markers."""
    return wrap_selection(text, selection, "**", "**")


def insert_italic(text: str, selection: TextSelection) -> InsertResult:
    """wraps the selection in *italic* markers."""
    return wrap_selection(text, selection, "*", "*")


def insert_underline(text: str, selection: TextSelection) -> InsertResult:
    """wraps the selection in <u> tags."""
    return wrap_selection(text, selection, "<u>", "</u>")


def insert_strikethrough(text: str, selection: TextSelection) -> InsertResult:
    """wraps the selection in ~~strikethrough~~ markers."""
    return wrap_selection(text, selection, "~~", "~~")


def insert_inline_code(text: str, selection: TextSelection) -> InsertResult:
    """wraps the selection in backticks."""
    return wrap_selection(text, selection, "`", "`")


def insert_link(text: str, selection: TextSelection, url: str = "url") -> InsertResult:
    """
    inserts a markdown link, using the selection as link text.

    Args:
        text: buffer
        selection: current selection ("link text" when empty)
        url: link target

    Returns:
        cursor after the closing parenthesis, selection over the URL
    """
    _check_selection(text, selection)
    label = text[selection.start : selection.end] or "link text"
    link = f"[{label}]({url})"
    new_text = text[: selection.start] + link + text[selection.end :]
    url_start = selection.start + len(label) + 3
    url_end = url_start + len(url)
    return InsertResult(
        text=new_text,
        cursor_position=url_end + 1,
        selection=TextSelection(url_start, url_end),
    )


def insert_image(
    text: str, selection: TextSelection, url: str, alt_text: str = "image"
) -> InsertResult:
    """replaces the selection with an image."""
    return _replace_selection(text, selection, f"![{alt_text}]({url})")


def insert_code_block(text: str, selection: TextSelection, language: str = "") -> InsertResult:
    """
    fences the selection as a code block.

    Args:
        text: buffer
        selection: current selection ("code here" when empty)
        language: info string after the opening fence

    Returns:
        selection over the code body, cursor at its end
    """
    _check_selection(text, selection)
    code = text[selection.start : selection.end] or "code here"
    block = f"```{language}\n{code}\n```"
    new_text = text[: selection.start] + block + text[selection.end :]
    code_start = selection.start + 3 + len(language) + 1
    return InsertResult(
        text=new_text,
        cursor_position=code_start + len(code),
        selection=TextSelection(code_start, code_start + len(code)),
    )


def insert_blockquote(text: str, selection: TextSelection) -> InsertResult:
    """prefixes the current line with "> "."""
    return insert_at_line_start(text, selection, "> ")


def insert_bullet_list(text: str, selection: TextSelection) -> InsertResult:
    """prefixes the current line with "- "."""
    return insert_at_line_start(text, selection, "- ")


def insert_numbered_list(text: str, selection: TextSelection) -> InsertResult:
    """prefixes the current line with "1. "."""
    return insert_at_line_start(text, selection, "1. ")


def insert_header(text: str, selection: TextSelection, level: int) -> InsertResult:
    """
    prefixes the current line with a level 1-6 heading marker.

    Raises:
        ValueError: if level is outside 1-6
    """
    if level not in range(1, 7):
        raise ValueError(f"header level must be 1-6, got {level}")
    return insert_at_line_start(text, selection, "#" * level + " ")


def insert_h1(text: str, selection: TextSelection) -> InsertResult:
    return insert_header(text, selection, 1)


def insert_h2(text: str, selection: TextSelection) -> InsertResult:
    return insert_header(text, selection, 2)


def insert_h3(text: str, selection: TextSelection) -> InsertResult:
    return insert_header(text, selection, 3)


def insert_h4(text: str, selection: TextSelection) -> InsertResult:
    return insert_header(text, selection, 4)


def insert_h5(text: str, selection: TextSelection) -> InsertResult:
    return insert_header(text, selection, 5)


def insert_h6(text: str, selection: TextSelection) -> InsertResult:
    return insert_header(text, selection, 6)


def insert_table(
    text: str, selection: TextSelection, columns: int = 2, rows: int = 2
) -> InsertResult:
    """
    replaces the selection with a placeholder table.

    Raises:
        ValueError: if columns or rows is below 1
    """
    if columns < 1 or rows < 1:
        raise ValueError("a table needs at least one column and one row")
    header = " | ".join(f"Header {i + 1}" for i in range(columns))
    separator = " | ".join("---" for _ in range(columns))
    cells = " | ".join(f"Cell {i + 1}" for i in range(columns))
    lines = [f"| {header} |", f"| {separator} |"] + [f"| {cells} |"] * rows
    return _replace_selection(text, selection, "\n".join(lines))


def insert_spoiler(text: str, selection: TextSelection, title: str = "Spoiler") -> InsertResult:
    """replaces the selection with a Hive spoiler block holding it."""
    _check_selection(text, selection)
    hidden = text[selection.start : selection.end] or "Hidden content here"
    return _replace_selection(text, selection, f">! [{title}] {hidden}")


def insert_horizontal_rule(text: str, selection: TextSelection) -> InsertResult:
    return _replace_selection(text, selection, "\n\n---\n\n")


def insert_emoji(text: str, selection: TextSelection, emoji: str) -> InsertResult:
    return _replace_selection(text, selection, emoji)


def insert_mention(text: str, selection: TextSelection, username: str) -> InsertResult:
    """inserts "@username " (a leading @ in username is not doubled)."""
    return _replace_selection(text, selection, f"@{username.lstrip('@')} ")


def insert_gif(text: str, selection: TextSelection, gif_url: str) -> InsertResult:
    """inserts a GIF image on its own line."""
    return _replace_selection(text, selection, f"\n![gif]({gif_url})\n")


# modifier+key shortcuts
SHORTCUTS: dict[str, Callable[[str, TextSelection], InsertResult]] = {
    "b": insert_bold,
    "i": insert_italic,
    "u": insert_underline,
    "k": insert_link,
    "`": insert_inline_code,
}


def apply_shortcut(key: str, text: str, selection: TextSelection) -> Optional[InsertResult]:
    """
    applies the edit bound to a modifier+key shortcut.

    Args:
        key: pressed key (case-insensitive)
        text: buffer
        selection: current selection

    Returns:
        edit result, or None when the key is unbound
    """
    operation = SHORTCUTS.get(key.lower())
    if operation is None:
        return None
    return operation(text, selection)
