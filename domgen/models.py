"""Pydantic models for render settings and input documents."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .dom_model import Sequence
from .join import RenderMode


class RenderSettings(BaseModel):
    """Contents of a domgen.yaml configuration file."""

    mode: RenderMode = Field(
        RenderMode.COMPACT,
        description="Join strategy: compact, nested or pre.",
    )
    title: Optional[str] = Field(
        None, description="Default page title when rendering full pages."
    )

    model_config = ConfigDict(extra="forbid")


class TreeDocument(BaseModel):
    """A tree to render, as loaded from YAML or JSON."""

    items: List[Any] = Field(
        default_factory=list,
        description="Nested lists of strings and nulls.",
    )
    tags: List[str] = Field(
        default_factory=list,
        description="Tag path applied to the items, innermost tag first.",
    )
    attributes: Dict[str, Any] = Field(
        default_factory=dict,
        description="Attributes of the outermost tag, in output order.",
    )
    mounted: Optional[str] = Field(
        None, description="Raw markup appended once after the rendered tree."
    )
    mode: Optional[RenderMode] = Field(
        None, description="Join strategy overriding the configured one."
    )
    title: Optional[str] = Field(None, description="Page title for --page output.")

    model_config = ConfigDict(extra="forbid")

    def to_node(self) -> Sequence:
        return Sequence(
            children=tuple(self.items),
            tags=tuple(self.tags),
            attributes=self.attributes,
            mounted=self.mounted,
        )


__all__ = ["RenderSettings", "TreeDocument"]
