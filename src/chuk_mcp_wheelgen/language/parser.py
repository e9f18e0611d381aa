"""
Parser - recursive descent over the token stream for one pattern expression.

Grammar:
    topLevel   := pattern [':' number] eof
    pattern    := sequence | command | symbolRun | '@' name
    sequence   := '$' (symbolRun | command)+
    command    := identifier '(' [argument (',' argument)*] ')'
    argument   := sequence | '@' name | command | symbolRun | number

An identifier starts a command only when the next token is '('; otherwise
its text is read as a symbol run. Arity is not checked here - that is the
expander's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chuk_mcp_wheelgen.constants import (
    BASE_SYMBOLS,
    DEFAULT_MAX_DEPTH,
    SPACER_SYMBOL,
    ErrorMessages,
)
from chuk_mcp_wheelgen.language.errors import ParseError, PatternSyntaxError
from chuk_mcp_wheelgen.language.lexer import Lexer
from chuk_mcp_wheelgen.language.tokens import Token, TokenType
from chuk_mcp_wheelgen.models.pattern import (
    CommandNode,
    ElementCountNode,
    GrammarItem,
    PatternNode,
    SequenceNode,
    SymbolNode,
    VariableReferenceNode,
)

# Tokens that may start a symbol run
_RUN_TOKENS = (TokenType.SYMBOL, TokenType.IDENTIFIER)
# Tokens that may name a variable after '@'
_NAME_TOKENS = (TokenType.IDENTIFIER, TokenType.SYMBOL)


@dataclass
class ParseResult:
    """
    Result of parsing (and optionally expanding) a pattern.

    Truthy iff parsing succeeded.
    """

    success: bool
    ast: PatternNode | None = None
    error: ParseError | None = None
    expanded: list[GrammarItem] | None = None

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        d: dict[str, Any] = {"success": self.success}
        if self.ast is not None:
            d["ast"] = self.ast.model_dump(mode="json")
        if self.error is not None:
            d["error"] = self.error.to_dict()
        if self.expanded is not None:
            d["expanded"] = [item.model_dump() for item in self.expanded]
        return d


class Parser:
    """
    Parses one pattern expression into a PatternNode tree.

    A parser owns its token cursor; use a fresh instance per input.
    """

    def __init__(self, text: str, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize the parser.

        Args:
            text: Pattern expression source
            max_depth: Maximum nesting of commands and sequences
        """
        self.tokens = Lexer(text).tokenize()
        self.position = 0
        self.max_depth = max_depth
        self._depth = 0

    def parse(self) -> ParseResult:
        """
        Parse the whole input.

        Returns:
            ParseResult with the AST, or with a located error
        """
        try:
            ast = self._parse_pattern()

            if self._current().kind == TokenType.COLON:
                self._advance()
                count_token = self._expect(TokenType.NUMBER)
                count = self._to_int(count_token.text, count_token)
                ast = ElementCountNode(pattern=ast, count=count)

            trailing = self._current()
            if trailing.kind != TokenType.EOF:
                raise self._error(ErrorMessages.TRAILING_INPUT.format(value=trailing), trailing)

            return ParseResult(success=True, ast=ast)
        except PatternSyntaxError as e:
            return ParseResult(success=False, error=e.error)

    def _parse_pattern(self) -> PatternNode:
        token = self._current()

        if token.kind == TokenType.DOLLAR:
            return self._parse_sequence()
        if token.kind == TokenType.AT:
            return self._parse_variable_reference()
        if token.kind in _RUN_TOKENS:
            return self._parse_run_or_command()

        raise self._error(ErrorMessages.UNEXPECTED_TOKEN.format(value=token), token)

    def _parse_sequence(self) -> SequenceNode:
        dollar = self._expect(TokenType.DOLLAR)
        self._enter(dollar)

        patterns: list[PatternNode] = []
        while self._current().kind in _RUN_TOKENS:
            patterns.append(self._parse_run_or_command())

        if not patterns:
            raise self._error(ErrorMessages.EMPTY_SEQUENCE, self._current())

        self._depth -= 1
        return SequenceNode(patterns=tuple(patterns))

    def _parse_run_or_command(self) -> PatternNode:
        """Dispatch on the one-token look-ahead for '('."""
        if self._current().kind == TokenType.IDENTIFIER and self._peek().kind == TokenType.LPAREN:
            return self._parse_command()
        return self._parse_symbol_run()

    def _parse_symbol_run(self) -> PatternNode:
        """
        Decompose a symbol/identifier token into glyphs.

        Each base letter becomes a SymbolNode (uppercase = rotated) with an
        optional digit-run count (at least 1); other characters are skipped.
        """
        token = self._current()
        if token.kind not in _RUN_TOKENS:
            raise self._error(
                ErrorMessages.EXPECTED_TOKEN.format(expected="symbol", actual=token.kind.value),
                token,
            )
        self._advance()

        text = token.text
        symbols: list[SymbolNode] = []
        i = 0
        while i < len(text):
            char = text[i]
            base = char.lower()
            if base not in BASE_SYMBOLS:
                i += 1
                continue

            j = i + 1
            while j < len(text) and text[j].isdigit():
                j += 1
            count = self._to_count(text[i + 1 : j], token) if j > i + 1 else 1

            symbols.append(SymbolNode(char=base, rotated=char.isupper(), count=count))
            i = j

        if len(symbols) > 1:
            return SequenceNode(patterns=tuple(symbols))
        if symbols:
            return symbols[0]

        # No recognizable glyphs; the expander rejects this node
        return SymbolNode(char=text.lower(), rotated=False)

    def _parse_command(self) -> CommandNode:
        name_token = self._expect(TokenType.IDENTIFIER)
        self._enter(name_token)
        self._expect(TokenType.LPAREN)

        args: list[PatternNode] = []
        while self._current().kind != TokenType.RPAREN:
            args.append(self._parse_argument())

            if self._current().kind == TokenType.COMMA:
                self._advance()
            elif self._current().kind != TokenType.RPAREN:
                raise self._error(ErrorMessages.EXPECTED_COMMA, self._current())

        self._expect(TokenType.RPAREN)
        self._depth -= 1
        return CommandNode(name=name_token.text.lower(), args=tuple(args))

    def _parse_argument(self) -> PatternNode:
        token = self._current()

        if token.kind == TokenType.DOLLAR:
            return self._parse_sequence()
        if token.kind == TokenType.AT:
            return self._parse_variable_reference()
        if token.kind in _RUN_TOKENS:
            return self._parse_run_or_command()
        if token.kind == TokenType.NUMBER:
            # Bare numbers carry the repeat/spacer count for seq and space
            self._advance()
            count = self._to_count(token.text, token)
            return SymbolNode(char=SPACER_SYMBOL, rotated=False, count=count)

        raise self._error(ErrorMessages.UNEXPECTED_ARGUMENT.format(value=token), token)

    def _parse_variable_reference(self) -> VariableReferenceNode:
        self._expect(TokenType.AT)
        token = self._current()
        if token.kind not in _NAME_TOKENS:
            raise self._error(
                ErrorMessages.EXPECTED_TOKEN.format(expected="identifier", actual=token.kind.value),
                token,
            )
        self._advance()
        return VariableReferenceNode(name=token.text)

    # -- cursor helpers --

    def _current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return self.tokens[-1]

    def _peek(self) -> Token:
        if self.position + 1 < len(self.tokens):
            return self.tokens[self.position + 1]
        return self.tokens[-1]

    def _advance(self) -> Token:
        token = self._current()
        if self.position < len(self.tokens):
            self.position += 1
        return token

    def _expect(self, kind: TokenType) -> Token:
        token = self._current()
        if token.kind != kind:
            raise self._error(
                ErrorMessages.EXPECTED_TOKEN.format(expected=kind.value, actual=token.kind.value),
                token,
            )
        return self._advance()

    def _to_int(self, digits: str, token: Token) -> int:
        try:
            return int(digits)
        except ValueError:
            # Past the interpreter's int-string conversion limit
            raise self._error(
                ErrorMessages.NUMBER_TOO_LONG.format(length=len(digits)), token
            ) from None

    def _to_count(self, digits: str, token: Token) -> int:
        """Repeat counts start at 1; only ``:N`` may be 0."""
        count = self._to_int(digits, token)
        if count < 1:
            raise self._error(ErrorMessages.INVALID_COUNT.format(value=digits), token)
        return count

    def _enter(self, token: Token) -> None:
        """Track nesting; fail past the configured limit."""
        self._depth += 1
        if self._depth > self.max_depth:
            raise self._error(ErrorMessages.MAX_DEPTH.format(limit=self.max_depth), token)

    def _error(self, message: str, token: Token) -> PatternSyntaxError:
        return PatternSyntaxError(ParseError.at_token(message, token))
