"""string-level repair of malformed markup before DOM parsing."""

import re

CENTER_WITH_RULE_PATTERN = re.compile(
    r"<p><center>([\s\S]*?)<hr\s*/?>([\s\S]*?)</center></p>",
    re.IGNORECASE,
)


def repair_center_tags(html: str) -> str:
    """
    unwraps <p><center>..<hr>..</center></p> into sibling blocks.

    A block-level <hr> inside <p><center> makes parsers close the paragraph
    early and leaves a dangling </center></p>.

    Args:
        html: rendered HTML

    Returns:
        HTML with <center>before</center><hr />after
    """
    return CENTER_WITH_RULE_PATTERN.sub(
        lambda m: f"<center>{m.group(1).strip()}</center><hr />{m.group(2).strip()}",
        html,
    )
