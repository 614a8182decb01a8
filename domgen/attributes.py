"""Tag name and attribute formatting."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from .escape import encode


def hyphenize(name: Any) -> str:
    """Map a Python identifier to HTML naming: ``data_id`` -> ``data-id``."""

    return str(name).replace("_", "-")


def _render_attr(name: Any, value: Any) -> Optional[str]:
    if value is None:
        return None
    if value is False:
        value = "none"
    elif value is True:
        value = ""
    return f'{hyphenize(name)}="{encode(value)}"'


def format_tag(tag: Any, attrs: Optional[Mapping[str, Any]] = None) -> Tuple[str, str]:
    """Return ``(open_fragment, tag_name)`` for a tag and its attributes.

    The fragment is the hyphenized tag name followed by the attributes in
    insertion order, e.g. ``('a href="/" data-id="1"', 'a')``. ``None``
    values are dropped, ``True`` renders as an empty value and ``False`` as
    ``"none"``.
    """

    name = hyphenize(tag)
    rendered = (_render_attr(key, value) for key, value in (attrs or {}).items())
    return " ".join([name, *filter(None, rendered)]), name


def json_format(tag: Any, attrs: Optional[Mapping[str, Any]] = None) -> List[Any]:
    """Head of a JsonML element: the tag name and, if given, its attributes."""

    head: List[Any] = [hyphenize(tag)]
    if attrs is not None:
        head.append({hyphenize(key): value for key, value in attrs.items()})
    return head


__all__ = ["format_tag", "hyphenize", "json_format"]
