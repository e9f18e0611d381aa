"""
Public entry points.

    parse_pattern:  text -> Lexer -> Parser -> Expander -> ParseResult
    parse_document: text -> DocumentParser -> DocumentParseResult

Nothing raises across these functions; every failure comes back as a
result with ``success=False`` and a located error.
"""

from __future__ import annotations

from collections.abc import Mapping

from chuk_mcp_wheelgen.constants import DEFAULT_MAX_DEPTH
from chuk_mcp_wheelgen.language.document import DocumentParser, DocumentParseResult
from chuk_mcp_wheelgen.language.errors import ExpansionError
from chuk_mcp_wheelgen.language.expander import PatternExpander
from chuk_mcp_wheelgen.language.parser import Parser, ParseResult
from chuk_mcp_wheelgen.models.pattern import PatternNode


def parse_pattern(
    text: str,
    variables: Mapping[str, PatternNode] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ParseResult:
    """
    Parse and expand a single pattern expression.

    Args:
        text: Pattern expression (e.g. 'seq($dh2v, 3):128')
        variables: Optional variable table for @name references
        max_depth: Nesting limit for parsing and for variable expansion

    Returns:
        ParseResult with ``ast`` and ``expanded`` on success
    """
    result = Parser(text, max_depth=max_depth).parse()
    if not result.success or result.ast is None:
        return result

    try:
        expanded = PatternExpander(variables, max_depth).expand(result.ast)
    except ExpansionError as e:
        return ParseResult(success=False, error=e.error)

    return ParseResult(success=True, ast=result.ast, expanded=expanded)


def parse_document(
    text: str,
    resolve_variables: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> DocumentParseResult:
    """
    Parse a whole-artwork document.

    Args:
        text: Document source
        resolve_variables: Substitute @name references eagerly
        max_depth: Nesting limit for each embedded pattern, also after substitution

    Returns:
        DocumentParseResult with ``ast`` on success
    """
    parser = DocumentParser(text, resolve_variables=resolve_variables, max_depth=max_depth)
    return parser.parse()
