"""
Error types for the pattern language.

ParseError is plain data carried by results; the exception classes are
raised internally and normalized into results at every public boundary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from chuk_mcp_wheelgen.language.tokens import Token


@dataclass(frozen=True)
class ParseError:
    """A located error: message plus offset, 1-based line and column."""

    message: str
    position: int = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def at_token(cls, message: str, token: Token) -> ParseError:
        """Create an error located at a token."""
        return cls(message=message, position=token.offset, line=token.line, column=token.column)


class PatternLanguageError(Exception):
    """Base class for errors raised inside the compiler."""

    def __init__(self, error: ParseError):
        super().__init__(error.message)
        self.error = error


class PatternSyntaxError(PatternLanguageError):
    """Structural error while parsing a pattern expression."""


class ExpansionError(PatternLanguageError):
    """Semantic error while expanding a pattern AST."""

    def __init__(self, message: str):
        super().__init__(ParseError(message=message))


class DocumentError(PatternLanguageError):
    """Malformed line in a document section."""

    @classmethod
    def at_line(cls, message: str, line: int) -> DocumentError:
        """Create an error pointing at a 1-based document line."""
        return cls(ParseError(message=message, position=0, line=line, column=1))
