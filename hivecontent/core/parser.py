"""Parser for Hive post JSON (condenser / bridge API shape)."""

import json
from typing import Any

from hivecontent.core.models import Post


def process_post(json_data: dict[str, Any]) -> Post:
    """
    Process a Hive post from API JSON.

    Args:
        json_data: raw post object as returned by get_content / bridge.get_post

    Returns:
        Processed Post object

    Raises:
        ValueError: if the object has no body
    """
    body = json_data.get("body")
    if body is None:
        raise ValueError("post has no body")

    return Post(
        author=str(json_data.get("author", "")),
        permlink=str(json_data.get("permlink", "")),
        title=str(json_data.get("title") or ""),
        body=str(body),
        json_metadata=_parse_metadata(json_data.get("json_metadata")),
    )


def _parse_metadata(raw: Any) -> dict[str, Any]:
    """json_metadata is a JSON string on chain but an object in some exports."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str) and raw:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}
