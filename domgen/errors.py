"""Errors raised when literal data does not have the shape a render expects."""

from __future__ import annotations

from typing import Any


def describe(value: Any) -> str:
    return f"{type(value).__name__}:{value!r}"


class StructureError(ValueError):
    """Base class for render-time shape errors."""


class StructuralTypeError(StructureError, TypeError):
    """An element is neither a string, a list, None nor rendered markup."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Expecting all array elements to be a string: `{describe(value)}'"
        )


class StructuralNestingError(StructureError):
    """An element is not a list although more than one tag level remains."""

    def __init__(self, tag: str, value: Any) -> None:
        self.tag = tag
        self.value = value
        super().__init__(f"Cannot apply tag `{tag}' to `{describe(value)}'")


__all__ = ["StructureError", "StructuralNestingError", "StructuralTypeError", "describe"]
