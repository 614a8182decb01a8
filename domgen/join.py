"""Join strategies and the process-wide render mode.

A strategy combines the children of one element into a single string. Each
child is escaped for the enclosing tag first (see :func:`escape_for`).

The active mode is a module global read at join time by renderers that were
not given a mode of their own. It is not synchronised: renders that need
different modes on different threads should use ``Renderer(mode=...)``.
"""

from __future__ import annotations

import textwrap
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, Union

from .escape import escape_for

INDENT = "  "

JoinStrategy = Callable[[Iterable[Any], Optional[str]], str]


class RenderMode(str, Enum):
    COMPACT = "compact"
    NESTED = "nested"
    PRE = "pre"


def _indent(text: str) -> str:
    # Every line, blank ones included.
    return textwrap.indent(text, INDENT, lambda line: True)


def join_compact(children: Iterable[Any], tag: Optional[str] = None) -> str:
    return "".join(escape_for(child, tag) for child in children)


def join_nested(children: Iterable[Any], tag: Optional[str] = None) -> str:
    """One child per line, indented, starting on a fresh line."""

    body = "".join(escape_for(child, tag) + "\n" for child in children)
    return "\n" + _indent(body)


def join_pre(children: Iterable[Any], tag: Optional[str] = None) -> str:
    """Indented layout inside one HTML comment.

    Each child sits between ``-->`` and ``<!--`` so that the whitespace used
    for the layout stays inside comments and does not reach the page.
    """

    body = "".join("-->" + escape_for(child, tag) + "<!--\n" for child in children)
    return "<!--\n" + _indent(body) + "-->"


STRATEGIES: Dict[RenderMode, JoinStrategy] = {
    RenderMode.COMPACT: join_compact,
    RenderMode.NESTED: join_nested,
    RenderMode.PRE: join_pre,
}

_active_mode = RenderMode.COMPACT


def strategy_for(mode: Union[RenderMode, str]) -> JoinStrategy:
    return STRATEGIES[RenderMode(mode)]


def get_mode() -> RenderMode:
    return _active_mode


def set_mode(mode: Union[RenderMode, str]) -> None:
    """Switch the join strategy for every subsequent render in the process."""

    global _active_mode
    _active_mode = RenderMode(mode)


def compact() -> None:
    set_mode(RenderMode.COMPACT)


def nested() -> None:
    set_mode(RenderMode.NESTED)


def pre() -> None:
    set_mode(RenderMode.PRE)


def join(children: Iterable[Any], tag: Optional[str] = None) -> str:
    """Join with the strategy of the currently active mode."""

    return strategy_for(_active_mode)(children, tag)


__all__ = [
    "INDENT",
    "JoinStrategy",
    "RenderMode",
    "STRATEGIES",
    "compact",
    "get_mode",
    "join",
    "join_compact",
    "join_nested",
    "join_pre",
    "nested",
    "pre",
    "set_mode",
    "strategy_for",
]
