"""Translate ANSI SGR escape sequences into ``<span class="...">`` markup.

Only single-parameter sequences are recognised (``ESC[31m``, ``ESC[1m``,
``ESC[0m``/``ESC[m``). Every reset closes exactly one span: there is no
stack of open spans, so callers must balance their sequences themselves.
Sequences with several parameters (``ESC[1;31m``) are copied through as text.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple, Optional

from markupsafe import Markup

ANSI_CLASSES = {
    "1": "bold",
    "4": "underline",
    "30": "black",
    "31": "red",
    "32": "green",
    "33": "yellow",
    "34": "blue",
    "35": "magenta",
    "36": "cyan",
    "37": "white",
    "40": "bg-black",
    "41": "bg-red",
    "42": "bg-green",
    "43": "bg-yellow",
    "44": "bg-blue",
    "45": "bg-magenta",
    "46": "bg-cyan",
    "47": "bg-white",
}

_RESET_RE = re.compile(r"\x1b\[0?m")
_STYLE_RE = re.compile(r"\x1b\[0?([0-9]+)m")
_TEXT_RE = re.compile(r"[^\x1b]+|\x1b")


class AnsiToken(NamedTuple):
    kind: str  # "reset", "style" or "text"
    value: str
    code: Optional[str] = None

    @property
    def class_name(self) -> str:
        return ANSI_CLASSES.get(self.code or "", "")

    def to_html(self) -> str:
        if self.kind == "reset":
            return "</span>"
        if self.kind == "style":
            return f'<span class="{self.class_name}">'
        return self.value


def scan(text: str) -> Iterator[AnsiToken]:
    """Split ``text`` into reset, style and plain text tokens, left to right."""

    pos = 0
    end = len(text)
    while pos < end:
        match = _RESET_RE.match(text, pos)
        if match:
            yield AnsiToken("reset", match.group())
        else:
            match = _STYLE_RE.match(text, pos)
            if match:
                yield AnsiToken("style", match.group(), match.group(1))
            else:
                match = _TEXT_RE.match(text, pos)
                yield AnsiToken("text", match.group())
        pos = match.end()


def convert(text: str) -> str:
    """Rewrite the SGR sequences of ``text`` as span tags; never fails.

    Codes missing from :data:`ANSI_CLASSES` open a span with an empty class.
    """

    return "".join(token.to_html() for token in scan(text))


def ansi2html(text: str) -> Markup:
    """Convert ``text`` without entity encoding and mark it pre-escaped."""

    return Markup(convert(text))


def stylesheet() -> str:
    """CSS rules for every class of :data:`ANSI_CLASSES`."""

    css_lines = []
    for name in ANSI_CLASSES.values():
        if name == "bold":
            declaration = "font-weight: bold"
        elif name == "underline":
            declaration = "text-decoration: underline"
        elif name.startswith("bg-"):
            declaration = f"background-color: {name[3:]}"
        else:
            declaration = f"color: {name}"
        css_lines.append(f".{name} {{ {declaration}; }}")
    return "\n".join(css_lines) + "\n"


__all__ = ["ANSI_CLASSES", "AnsiToken", "ansi2html", "convert", "scan", "stylesheet"]
