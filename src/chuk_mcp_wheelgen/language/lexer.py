"""
Lexer - converts pattern text into a token stream.

The lexer is deliberately lenient: unknown characters are skipped and an
unterminated string runs to the end of input. It never raises.
"""

from __future__ import annotations

import logging

from chuk_mcp_wheelgen.constants import COMMAND_NAMES
from chuk_mcp_wheelgen.language.tokens import PUNCTUATION, Token, TokenType

logger = logging.getLogger(__name__)


class Lexer:
    """
    Single-use tokenizer over one input string.

    The cursor (position, line, column) is private to the instance;
    create a new Lexer per input.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> list[Token]:
        """
        Tokenize the whole input.

        Returns:
            Tokens in source order, always ending with an EOF token
        """
        tokens: list[Token] = []

        while self.position < len(self.text):
            char = self.text[self.position]

            if char.isspace():
                self._advance()
                continue

            if char in PUNCTUATION:
                tokens.append(self._make_token(PUNCTUATION[char], char))
                self._advance()
                continue

            if char in ("'", '"'):
                tokens.append(self._read_string())
                continue

            if _is_digit(char):
                tokens.append(self._read_number())
                continue

            if char.isascii() and char.isalpha():
                # Runs may continue with digits (d3, dh2v)
                tokens.append(self._read_word())
                continue

            logger.debug(
                "Skipping unknown character %r at line %d, column %d",
                char,
                self.line,
                self.column,
            )
            self._advance()

        tokens.append(self._make_token(TokenType.EOF, ""))
        return tokens

    def _make_token(self, kind: TokenType, text: str) -> Token:
        """Create a token starting at the current cursor."""
        return Token(kind=kind, text=text, offset=self.position, line=self.line, column=self.column)

    def _advance(self) -> None:
        """Move past one character, tracking line and column."""
        if self.text[self.position] == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1

    def _read_number(self) -> Token:
        offset, line, column = self.position, self.line, self.column
        while self.position < len(self.text) and _is_digit(self.text[self.position]):
            self._advance()
        return Token(TokenType.NUMBER, self.text[offset : self.position], offset, line, column)

    def _read_word(self) -> Token:
        """Read an alphanumeric run and classify it."""
        offset, line, column = self.position, self.line, self.column
        while self.position < len(self.text) and _is_word_char(self.text[self.position]):
            self._advance()
        word = self.text[offset : self.position]

        if word.lower() in COMMAND_NAMES or len(word) > 1:
            kind = TokenType.IDENTIFIER
        else:
            kind = TokenType.SYMBOL

        return Token(kind, word, offset, line, column)

    def _read_string(self) -> Token:
        """Read a quoted string; the quotes are not part of the text."""
        offset, line, column = self.position, self.line, self.column
        quote = self.text[self.position]
        self._advance()

        begin = self.position
        while self.position < len(self.text) and self.text[self.position] != quote:
            self._advance()
        value = self.text[begin : self.position]

        # Closing quote may be missing at end of input
        if self.position < len(self.text):
            self._advance()

        return Token(TokenType.STRING, value, offset, line, column)


def _is_word_char(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def tokenize(text: str) -> list[Token]:
    """Convenience function to tokenize a string."""
    return Lexer(text).tokenize()
