"""Recursive rendering of literal trees into HTML markup.

Input is plain Python data: strings, ``None`` and lists/tuples of those, plus
:class:`Leaf`/:class:`Sequence` nodes and earlier :class:`Rendered` results.
A tree is rendered against a tag path, innermost tag first::

    >>> render_tree(["x", "y"], "li", "ul").markup
    '<ul><li>x</li><li>y</li></ul>'

Every call returns a :class:`Rendered` whose ``mounted`` text gathers the
mounted payloads of the whole subtree, in document order.
"""

from __future__ import annotations

import keyword
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from . import ansi
from .attributes import format_tag
from .dom_model import Leaf, Rendered, Sequence, join_mounted
from .errors import StructuralNestingError, StructuralTypeError
from .escape import escape_for, is_pre_escaped
from .join import RenderMode, get_mode, strategy_for

Transform = Callable[[Any], Any]

_LIST_TYPES = (list, tuple)


def _is_leaf_like(value: Any) -> bool:
    return (
        value is None
        or isinstance(value, (str, Leaf, Sequence, Rendered))
        or is_pre_escaped(value)
    )


def flatten(items: Iterable[Any]) -> Iterator[Any]:
    for item in items:
        if isinstance(item, _LIST_TYPES):
            yield from flatten(item)
        else:
            yield item


def map_leaves(items: Iterable[Any], transform: Transform) -> List[Any]:
    """Apply ``transform`` to every leaf of a nested list, keeping its shape.

    ``None`` leaves are kept as they are.
    """

    return [
        map_leaves(item, transform)
        if isinstance(item, _LIST_TYPES)
        else (None if item is None else transform(item))
        for item in items
    ]


def validate_elements(elements: List[Any], recurse: List[str]) -> None:
    if len(recurse) <= 1:
        for element in elements:
            if not (isinstance(element, _LIST_TYPES) or _is_leaf_like(element)):
                raise StructuralTypeError(element)
    else:
        for element in elements:
            if not isinstance(element, _LIST_TYPES):
                raise StructuralNestingError(recurse[-2], element)


def _keyword_attrs(attrs: Dict[str, Any]) -> Dict[str, Any]:
    # class_="x" -> class="x"
    return {
        key[:-1] if key.endswith("_") and keyword.iskeyword(key[:-1]) else key: value
        for key, value in attrs.items()
    }


class Renderer:
    """Tree renderer bound to a join strategy.

    ``Renderer()`` follows the process-wide mode (:func:`domgen.join.set_mode`)
    at call time; ``Renderer(mode="nested")`` always uses its own mode and is
    safe to use alongside renders in other modes.
    """

    def __init__(self, mode: Optional[Union[RenderMode, str]] = None) -> None:
        self.mode = RenderMode(mode) if mode is not None else None

    @property
    def active_mode(self) -> RenderMode:
        return self.mode if self.mode is not None else get_mode()

    def join(self, children: Iterable[Any], tag: Optional[str] = None) -> str:
        return strategy_for(self.active_mode)(children, tag)

    def leaf(
        self,
        text: Any,
        tag: Optional[str] = None,
        *,
        mounted: Optional[str] = None,
        transform: Optional[Transform] = None,
        **attrs: Any,
    ) -> Rendered:
        """Render one string, optionally wrapped in ``tag``.

        Without a tag the text is only escaped. With a tag the text goes
        through ``transform``, is escaped for the tag (``style`` and ``script``
        keep their content raw) and has its ANSI colour codes converted to
        spans before it is wrapped.
        """

        return self._leaf(text, tag, _keyword_attrs(attrs), mounted, transform)

    def void(self, tag: str, *, mounted: Optional[str] = None, **attrs: Any) -> Rendered:
        """Render a self-closing element such as ``<br />``."""

        return self._void(tag, _keyword_attrs(attrs), mounted)

    def tree(
        self,
        items: Iterable[Any],
        *tags: str,
        mounted: Optional[str] = None,
        transform: Optional[Transform] = None,
        **attrs: Any,
    ) -> Rendered:
        """Render a list against a tag path, innermost tag first.

        The last tag wraps the joined children and receives ``attrs``; each
        earlier tag is applied one nesting level down. ``transform`` maps
        the leaves before they are escaped.
        """

        return self._tree(items, list(tags), _keyword_attrs(attrs), mounted, transform)

    def render(self, node: Any) -> Rendered:
        """Render a node variant or plain literal data."""

        if isinstance(node, Rendered):
            return node
        if isinstance(node, Sequence):
            return self._tree(
                node.children, list(node.tags), node.attributes, node.mounted, None
            )
        if isinstance(node, _LIST_TYPES):
            return self._tree(node, [], {}, None, None)
        if _is_leaf_like(node):
            return self._leaf(node, None, {}, None, None)
        raise StructuralTypeError(node)

    def _leaf(
        self,
        text: Any,
        tag: Optional[str],
        attrs: Mapping[str, Any],
        mounted: Optional[str],
        transform: Optional[Transform],
    ) -> Rendered:
        if text is None and tag is not None:
            return self._void(tag, attrs, mounted)
        if isinstance(text, Sequence):
            text = self.render(text)
        inherited = text.mounted if isinstance(text, Rendered) else None
        if isinstance(text, Leaf):
            text = text.content()

        if tag is None:
            markup = escape_for(text)
        else:
            if transform is not None:
                text = transform(text)
            body = ansi.convert(escape_for(text, tag))
            open_tag, name = format_tag(tag, attrs)
            markup = f"<{open_tag}>{body}</{name}>"
        return Rendered(markup, join_mounted(inherited, mounted))

    def _void(self, tag: str, attrs: Mapping[str, Any], mounted: Optional[str]) -> Rendered:
        open_tag, _ = format_tag(tag, attrs)
        return Rendered(f"<{open_tag} />", join_mounted(mounted))

    def _tree(
        self,
        items: Iterable[Any],
        tags: List[str],
        attrs: Mapping[str, Any],
        mounted: Optional[str],
        transform: Optional[Transform],
    ) -> Rendered:
        *recurse, tag = tags or [None]

        elements = list(items)
        if not recurse:
            if transform is not None:
                elements = map_leaves(elements, transform)
            elements = list(flatten(elements))
        validate_elements(elements, recurse)

        if recurse:
            children = [self._descend(element, recurse, transform) for element in elements]
        else:
            children = [self._child(element) for element in elements]

        markup = self.join(children, tag)
        if tag is not None:
            open_tag, name = format_tag(tag, attrs)
            markup = f"<{open_tag}>{markup}</{name}>"

        gathered = [child.mounted for child in children if isinstance(child, Rendered)]
        return Rendered(markup, join_mounted(*gathered, mounted))

    def _descend(
        self, element: Any, recurse: List[str], transform: Optional[Transform]
    ) -> Rendered:
        if isinstance(element, _LIST_TYPES):
            return self._tree(element, recurse, {}, None, transform)
        # Only reached with a single remaining tag.
        tag = recurse[-1]
        if element is None:
            return self._void(tag, {}, None)
        return self._leaf(element, tag, {}, None, transform)

    def _child(self, element: Any) -> Any:
        if isinstance(element, Leaf):
            return element.content()
        if isinstance(element, Sequence):
            return self.render(element)
        return element


_default = Renderer()


def render_leaf(
    text: Any,
    tag: Optional[str] = None,
    *,
    mounted: Optional[str] = None,
    transform: Optional[Transform] = None,
    **attrs: Any,
) -> Rendered:
    return _default.leaf(text, tag, mounted=mounted, transform=transform, **attrs)


def render_tree(
    items: Iterable[Any],
    *tags: str,
    mounted: Optional[str] = None,
    transform: Optional[Transform] = None,
    **attrs: Any,
) -> Rendered:
    return _default.tree(items, *tags, mounted=mounted, transform=transform, **attrs)


def render_void(tag: str, *, mounted: Optional[str] = None, **attrs: Any) -> Rendered:
    return _default.void(tag, mounted=mounted, **attrs)


def render(node: Any) -> Rendered:
    return _default.render(node)


__all__ = [
    "Renderer",
    "Transform",
    "render",
    "render_leaf",
    "render_tree",
    "render_void",
]
