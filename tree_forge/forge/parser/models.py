"""Data models for tree parsing."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class NodeKind(str, Enum):
    """Kind of a tree entry, inferred from its name."""

    directory = "directory"
    file = "file"


class Node(BaseModel):
    """One entry of the parsed tree."""

    name: str
    path: str
    kind: NodeKind = NodeKind.directory
    children: list[Node] = Field(default_factory=list)
    hint: str | None = None
    line: int | None = None  # 1-based source line

    @property
    def is_directory(self) -> bool:
        return self.kind == NodeKind.directory


class ParseLine(BaseModel):
    """A classified, non-blank source line."""

    line: int
    depth: int
    name: str
    hint: str | None = None
    indent: int = 0  # measured prefix width before division by the unit


class IndentProfile(BaseModel):
    """Indentation unit detected for one parse."""

    model_config = ConfigDict(frozen=True)

    unit: str
    uses_guides: bool = False
    width: int = Field(2, ge=1)  # columns one level occupies once tabs are expanded


class TreeStyle(BaseModel):
    """Glyph set used to draw tree guides."""

    model_config = ConfigDict(frozen=True)

    indent: str = "  "
    vertical: str = "│"
    horizontal: str = "─"
    corner: str = "└"
    branch: str = "├"

    @property
    def glyphs(self) -> str:
        return f"{self.vertical}{self.branch}{self.corner}{self.horizontal}"


UNICODE_STYLE = TreeStyle()
ASCII_STYLE = TreeStyle(vertical="|", horizontal="-", corner="`", branch="+")

TREE_STYLES: dict[str, TreeStyle] = {
    "unicode": UNICODE_STYLE,
    "ascii": ASCII_STYLE,
}


class ParseConfig(BaseModel):
    """Parser settings supplied by the surrounding config layer."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    tab_indentation_size: int = Field(2, ge=1)
    detect_guides: bool = True
    tree_style: TreeStyle = UNICODE_STYLE
    preserve_hints: bool = True

    @field_validator("tree_style", mode="before")
    @classmethod
    def _named_style(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return TREE_STYLES[value.lower()]
            except KeyError:
                raise ValueError(
                    f"Unknown tree style '{value}' (expected one of: {', '.join(TREE_STYLES)})"
                ) from None
        return value
