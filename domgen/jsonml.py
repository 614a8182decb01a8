"""JsonML export: the same trees as nested ``[tag, {attrs}, *children]`` lists.

No escaping and no join strategy are involved; the structure is mapped as is.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from .attributes import json_format
from .dom_model import Leaf, Rendered
from .render import flatten, validate_elements


def jsonml(content: Any, tag: str, attrs: Optional[Mapping[str, Any]] = None) -> List[Any]:
    """Wrap ``content`` (``None``, a string or a list) in a JsonML element."""

    element = json_format(tag, attrs)
    if content is None:
        return element
    if isinstance(content, (list, tuple)):
        return [*element, *content]
    return [*element, _text(content)]


def _text(value: Any) -> Any:
    if isinstance(value, Leaf):
        return value.text
    if isinstance(value, Rendered):
        return value.markup
    return value


def tree_jsonml(items: Iterable[Any], *tags: str, **attrs: Any) -> List[Any]:
    """JsonML counterpart of :meth:`domgen.render.Renderer.tree`.

    Without tags the flattened children are returned as a plain list;
    ``None`` children are dropped.
    """

    *recurse, tag = list(tags) or [None]

    elements = list(items)
    if not recurse:
        elements = list(flatten(elements))
    validate_elements(elements, recurse)

    if recurse:
        children = [_descend(element, recurse) for element in elements]
    else:
        children = [_text(element) for element in elements if element is not None]

    if tag is None:
        return children
    return jsonml(children, tag, attrs or None)


def _descend(element: Any, recurse: List[str]) -> List[Any]:
    if isinstance(element, (list, tuple)):
        return tree_jsonml(element, *recurse)
    return jsonml(element, recurse[-1])


__all__ = ["jsonml", "tree_jsonml"]
