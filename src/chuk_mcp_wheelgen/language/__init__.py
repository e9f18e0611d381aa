"""
Pattern language - lexer, parser, expander, flat compiler, document parser.

The pipeline:
    pattern text → Tokens → PatternNode AST → GrammarItem list → flat string
    document text → DocumentAST (rings, dot, guides, variables, palette)
"""

from chuk_mcp_wheelgen.language.commands import (
    COMMANDS,
    CommandDefinition,
    get_command,
    is_pattern_language,
)
from chuk_mcp_wheelgen.language.compiler import (
    PatternCompiler,
    compile_pattern,
    compile_pattern_string,
    items_to_flat,
    parse_flat_grammar,
)
from chuk_mcp_wheelgen.language.document import (
    DocumentParser,
    DocumentParseResult,
    parse_color_expression,
)
from chuk_mcp_wheelgen.language.errors import (
    DocumentError,
    ExpansionError,
    ParseError,
    PatternLanguageError,
    PatternSyntaxError,
)
from chuk_mcp_wheelgen.language.expander import PatternExpander, expand, nesting_depth
from chuk_mcp_wheelgen.language.lexer import Lexer, tokenize
from chuk_mcp_wheelgen.language.parser import Parser, ParseResult
from chuk_mcp_wheelgen.language.pipeline import parse_document, parse_pattern
from chuk_mcp_wheelgen.language.tokens import Token, TokenType

__all__ = [
    # Entry points
    "parse_pattern",
    "parse_document",
    "is_pattern_language",
    "COMMANDS",
    "CommandDefinition",
    "get_command",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Parser
    "Parser",
    "ParseResult",
    # Expander
    "PatternExpander",
    "expand",
    "nesting_depth",
    # Compiler
    "PatternCompiler",
    "compile_pattern",
    "compile_pattern_string",
    "items_to_flat",
    "parse_flat_grammar",
    # Documents
    "DocumentParser",
    "DocumentParseResult",
    "parse_color_expression",
    # Errors
    "ParseError",
    "PatternLanguageError",
    "PatternSyntaxError",
    "ExpansionError",
    "DocumentError",
]
