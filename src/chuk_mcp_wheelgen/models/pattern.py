"""
Pattern AST - the tree a single pattern expression parses to.

Nodes form a closed union discriminated on ``type``:
- SymbolNode: one glyph, optionally rotated and repeated
- SequenceNode: ordered concatenation, optionally repeated as a whole
- CommandNode: named operator (seq, mir, space) over argument patterns
- ElementCountNode: forces an exact expanded length
- VariableReferenceNode: @name, resolved against a variable table

All nodes are frozen; a tree is never mutated after the parser returns it.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class GrammarItem(BaseModel):
    """
    A single concrete symbol instance in an expanded pattern.

    This is what the rendering layer consumes: one glyph per ring slot.
    """

    char: Literal["d", "h", "l", "v", "x"] = Field(..., description="Base glyph")
    rotated: bool = Field(False, description="Rotated 90 degrees")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.char.upper() if self.rotated else self.char


class SymbolNode(BaseModel):
    """A base glyph with rotation flag and repeat count."""

    type: Literal["symbol"] = "symbol"
    char: str = Field(..., description="Base glyph (d, h, l, v, x)")
    rotated: bool = Field(False, description="Uppercase in source")
    count: int = Field(1, ge=1, description="Repeat count")

    model_config = {"frozen": True}


class SequenceNode(BaseModel):
    """Concatenation of sub-patterns; ``count`` repeats the whole list."""

    type: Literal["sequence"] = "sequence"
    patterns: tuple[PatternNode, ...] = Field(..., description="Sub-patterns in order")
    count: int | None = Field(None, ge=1, description="Repeat count for the whole sequence")

    model_config = {"frozen": True}


class CommandNode(BaseModel):
    """A named higher-order operator. Arity is checked at expansion time."""

    type: Literal["command"] = "command"
    name: str = Field(..., description="Command name, lowercased")
    args: tuple[PatternNode, ...] = Field(default_factory=tuple, description="Arguments")

    model_config = {"frozen": True}


class ElementCountNode(BaseModel):
    """Repeat-and-truncate wrapper produced by a trailing ``:N``."""

    type: Literal["element_count"] = "element_count"
    pattern: PatternNode = Field(..., description="Wrapped pattern")
    count: int = Field(..., ge=0, description="Exact number of elements")

    model_config = {"frozen": True}


class VariableReferenceNode(BaseModel):
    """Reference to a pattern defined in a document's variables section."""

    type: Literal["variable_reference"] = "variable_reference"
    name: str = Field(..., description="Variable name without the @")

    model_config = {"frozen": True}


PatternNode = Annotated[
    SymbolNode | SequenceNode | CommandNode | ElementCountNode | VariableReferenceNode,
    Field(discriminator="type"),
]

SequenceNode.model_rebuild()
CommandNode.model_rebuild()
ElementCountNode.model_rebuild()
