"""
Pydantic models for the pattern language.

This module provides:
- PatternNode: the pattern AST union (symbol, sequence, command, ...)
- GrammarItem: one concrete expanded symbol
- ColorNode: the palette color union
- DocumentAST: a whole-artwork document with rings, dot, variables, palette
"""

from chuk_mcp_wheelgen.models.document import (
    ColorFunction,
    ColorHsb,
    ColorNode,
    ColorReference,
    ColorRgb,
    DocumentAST,
    DotDefinition,
    GuidesDefinition,
    RingDefinition,
    VariableDefinition,
)
from chuk_mcp_wheelgen.models.pattern import (
    CommandNode,
    ElementCountNode,
    GrammarItem,
    PatternNode,
    SequenceNode,
    SymbolNode,
    VariableReferenceNode,
)

__all__ = [
    # Pattern AST
    "PatternNode",
    "SymbolNode",
    "SequenceNode",
    "CommandNode",
    "ElementCountNode",
    "VariableReferenceNode",
    "GrammarItem",
    # Colors
    "ColorNode",
    "ColorFunction",
    "ColorRgb",
    "ColorHsb",
    "ColorReference",
    # Document
    "DocumentAST",
    "RingDefinition",
    "DotDefinition",
    "GuidesDefinition",
    "VariableDefinition",
]
