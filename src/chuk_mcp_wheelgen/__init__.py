"""
Wheelgen pattern language.

Compiles pattern expressions and artwork documents into ordered symbol
sequences for a ring renderer:

    >>> from chuk_mcp_wheelgen import parse_pattern
    >>> [str(item) for item in parse_pattern("seq($d, $h, 3)").expanded]
    ['d', 'h', 'd', 'h', 'd', 'h']
"""

from chuk_mcp_wheelgen.language import (
    COMMANDS,
    compile_pattern,
    compile_pattern_string,
    is_pattern_language,
    parse_document,
    parse_pattern,
)

__version__ = "0.1.0"

__all__ = [
    "COMMANDS",
    "compile_pattern",
    "compile_pattern_string",
    "is_pattern_language",
    "parse_document",
    "parse_pattern",
]
