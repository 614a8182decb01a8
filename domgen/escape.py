"""Entity encoding shared by the renderer, the join strategies and attributes."""

from __future__ import annotations

from typing import Any, Optional

from markupsafe import escape

# Children of these tags hold code, not text.
RAW_TEXT_TAGS = frozenset({"style", "script"})


def encode(text: Any) -> str:
    """Entity-encode ``text`` unless it is already markup (``__html__``)."""

    return str(escape(text))


def is_pre_escaped(value: Any) -> bool:
    return hasattr(value, "__html__")


def escape_for(text: Any, tag: Optional[str] = None) -> str:
    """Escape a child for placement inside ``tag``.

    ``None`` renders as an empty string, pre-escaped values are returned
    verbatim and the content of ``style``/``script`` is never encoded.
    """

    if text is None:
        return ""
    if is_pre_escaped(text):
        return text.__html__()
    if tag in RAW_TEXT_TAGS:
        return str(text)
    return encode(text)


__all__ = ["RAW_TEXT_TAGS", "encode", "escape_for", "is_pre_escaped"]
