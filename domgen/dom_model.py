"""Node variants accepted by the renderer and the result it returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union

from markupsafe import Markup


@dataclass(frozen=True)
class Leaf:
    """A string; pre-escaped text is emitted verbatim, never re-encoded."""

    text: str
    pre_escaped: bool = False

    def content(self) -> Union[str, Markup]:
        return Markup(self.text) if self.pre_escaped else self.text


@dataclass(frozen=True)
class Sequence:
    """Children wrapped by a tag path, innermost tag first.

    Attributes and ``mounted`` belong to the last (outermost) tag.
    """

    children: Tuple[Any, ...]
    tags: Tuple[str, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict)
    mounted: Optional[str] = None


@dataclass(frozen=True)
class Rendered:
    """Markup plus the mounted payload gathered from the whole subtree.

    The markup is safe HTML; ``mounted`` is raw text meant to be emitted once,
    after the markup of the outermost render (see :attr:`document`).
    """

    markup: str
    mounted: str = ""

    def __html__(self) -> str:
        return self.markup

    def __str__(self) -> str:
        return self.markup

    @property
    def document(self) -> str:
        return self.markup + self.mounted


Node = Union[Leaf, Sequence]


def join_mounted(*parts: Optional[str]) -> str:
    return "".join(part for part in parts if part)


__all__ = ["Leaf", "Node", "Rendered", "Sequence", "join_mounted"]
