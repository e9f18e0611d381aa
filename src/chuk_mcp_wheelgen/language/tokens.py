"""
Token primitives for the pattern lexer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(str, Enum):
    """Kinds of lexical tokens."""

    DOLLAR = "dollar"  # $
    AT = "at"  # @
    LPAREN = "lparen"  # (
    RPAREN = "rparen"  # )
    COMMA = "comma"  # ,
    COLON = "colon"  # :
    EQUALS = "equals"  # =
    LBRACKET = "lbracket"  # [
    RBRACKET = "rbracket"  # ]
    STRING = "string"  # "color name" or 'color name'
    NUMBER = "number"  # digit run
    IDENTIFIER = "identifier"  # command names, multi-char runs
    SYMBOL = "symbol"  # single glyph letter
    EOF = "eof"


# Single-character punctuation
PUNCTUATION: dict[str, TokenType] = {
    "$": TokenType.DOLLAR,
    "@": TokenType.AT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "=": TokenType.EQUALS,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}


@dataclass(frozen=True)
class Token:
    """
    A lexical token with its source location.

    ``offset`` is 0-based; ``line`` and ``column`` are 1-based and point
    at the first character of the token.
    """

    kind: TokenType
    text: str
    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        if self.kind == TokenType.EOF:
            return "end of input"
        return self.text
