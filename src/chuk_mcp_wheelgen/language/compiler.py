"""
Pattern Compiler - downgrades pattern-language ASTs to the flat legacy notation.

The flat notation is what simpler consumers understand: base characters,
uppercase for rotated, an optional digit run repeating the character.
For example:
- $Vx        -> Vx
- mir($dhl)  -> lhd
- seq($dh, 3) -> dhdhdh
- $d3h       -> d3h
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from chuk_mcp_wheelgen.constants import BASE_SYMBOLS, SOLID_RING
from chuk_mcp_wheelgen.language.errors import ExpansionError
from chuk_mcp_wheelgen.language.expander import PatternExpander
from chuk_mcp_wheelgen.language.parser import Parser
from chuk_mcp_wheelgen.models.pattern import GrammarItem, PatternNode

logger = logging.getLogger(__name__)


def parse_flat_grammar(text: str) -> list[GrammarItem]:
    """
    Read the flat legacy notation.

    Each base letter may be followed by a digit run repeat count;
    anything else is skipped.

    Args:
        text: Flat grammar string (e.g. 'd3hV')

    Returns:
        Concrete symbols in order
    """
    items: list[GrammarItem] = []
    i = 0
    while i < len(text):
        char = text[i]
        j = i + 1
        while j < len(text) and "0" <= text[j] <= "9":
            j += 1

        base = char.lower()
        if base in BASE_SYMBOLS:
            repeat = int(text[i + 1 : j]) if j > i + 1 else 1
            items.extend([GrammarItem(char=base, rotated=char.isupper())] * repeat)
            i = j
        else:
            i += 1
    return items


def items_to_flat(items: list[GrammarItem]) -> str:
    """
    Serialize symbols to flat notation, collapsing runs.

    Consecutive identical symbols become ``<char><n>``; a single one is
    written bare.
    """
    parts: list[str] = []
    i = 0
    while i < len(items):
        j = i + 1
        while j < len(items) and items[j] == items[i]:
            j += 1
        run = j - i
        parts.append(str(items[i]) if run == 1 else f"{items[i]}{run}")
        i = j
    return "".join(parts)


class PatternCompiler:
    """
    Compiles pattern ASTs and pattern strings to flat notation.

    Compilation never raises: failures are logged and an empty (or
    best-effort) string is returned.
    """

    def __init__(self, variables: Mapping[str, PatternNode] | None = None):
        """
        Initialize the compiler.

        Args:
            variables: Optional variable table for @name references
        """
        self.expander = PatternExpander(variables)

    def compile_pattern(self, ast: PatternNode) -> str:
        """
        Compile an AST to flat notation.

        Args:
            ast: Pattern AST

        Returns:
            Flat string, or '' if the AST cannot be expanded
        """
        try:
            return items_to_flat(self.expander.expand(ast))
        except ExpansionError as e:
            logger.warning("Pattern compilation failed: %s", e)
            return ""

    def compile_pattern_string(self, text: str) -> str:
        """
        Compile pattern text (either syntax) to flat notation.

        Args:
            text: Pattern-language or flat pattern text

        Returns:
            Flat string; '-' for a solid ring; the text without a
            leading '$' if it cannot be compiled
        """
        stripped = text.strip()
        if not stripped:
            return ""
        if stripped == SOLID_RING:
            return SOLID_RING

        result = Parser(stripped).parse()
        if result.success and result.ast is not None:
            try:
                return items_to_flat(self.expander.expand(result.ast))
            except ExpansionError as e:
                logger.warning("Pattern string compilation failed: %s", e)
        else:
            logger.warning("Pattern string compilation failed: %s", result.error)

        return stripped[1:] if stripped.startswith("$") else stripped


def compile_pattern(ast: PatternNode, variables: Mapping[str, PatternNode] | None = None) -> str:
    """Convenience function to compile an AST to flat notation."""
    return PatternCompiler(variables).compile_pattern(ast)


def compile_pattern_string(text: str) -> str:
    """Convenience function to compile pattern text to flat notation."""
    return PatternCompiler().compile_pattern_string(text)
