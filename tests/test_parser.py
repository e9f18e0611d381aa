"""
Tests for the recursive-descent parser.

Tests cover:
- Symbol runs, sequences, commands, element counts, variable references
- Command vs symbol look-ahead
- Structural errors with locations
- Nesting depth limit
"""

import pytest

from chuk_mcp_wheelgen.language import Parser, ParseResult
from chuk_mcp_wheelgen.models import (
    CommandNode,
    ElementCountNode,
    SequenceNode,
    SymbolNode,
    VariableReferenceNode,
)


def parse_ok(text: str):
    result = Parser(text).parse()
    assert result.success, result.error
    return result.ast


def parse_error(text: str, **kwargs):
    result = Parser(text, **kwargs).parse()
    assert not result.success
    assert result.ast is None
    return result.error


class TestSymbolRuns:
    """Tests for symbol-run decomposition."""

    def test_single_symbol(self) -> None:
        """A lone glyph is a bare symbol with count 1."""
        assert parse_ok("d") == SymbolNode(char="d", rotated=False, count=1)

    def test_rotated_symbol(self) -> None:
        """Uppercase means rotated."""
        assert parse_ok("V") == SymbolNode(char="v", rotated=True)

    def test_symbol_with_count(self) -> None:
        """A trailing digit run is the repeat count."""
        assert parse_ok("D3") == SymbolNode(char="d", rotated=True, count=3)

    def test_multi_symbol_run(self) -> None:
        """Several glyphs become a sequence in source order."""
        assert parse_ok("dh2v") == SequenceNode(
            patterns=(
                SymbolNode(char="d"),
                SymbolNode(char="h", count=2),
                SymbolNode(char="v"),
            )
        )

    def test_unknown_letters_skipped(self) -> None:
        """Letters outside the alphabet are skipped."""
        assert parse_ok("dzh") == SequenceNode(patterns=(SymbolNode(char="d"), SymbolNode(char="h")))

    def test_degenerate_fallback(self) -> None:
        """A run with no glyphs falls back to its lowercased text."""
        assert parse_ok("Zq") == SymbolNode(char="zq", rotated=False)


class TestSequences:
    """Tests for $-prefixed sequences."""

    def test_dollar_sequence(self) -> None:
        """$ wraps the following runs."""
        ast = parse_ok("$dh2v")
        assert isinstance(ast, SequenceNode)
        assert len(ast.patterns) == 1
        assert isinstance(ast.patterns[0], SequenceNode)

    def test_sequence_of_several_runs(self) -> None:
        """Whitespace-separated runs stay in order."""
        assert parse_ok("$d h") == SequenceNode(patterns=(SymbolNode(char="d"), SymbolNode(char="h")))

    def test_sequence_with_command(self) -> None:
        """A command can appear inside a sequence."""
        ast = parse_ok("$d mir($hl)")
        assert isinstance(ast, SequenceNode)
        assert isinstance(ast.patterns[1], CommandNode)
        assert ast.patterns[1].name == "mir"

    def test_empty_sequence(self) -> None:
        """$ with nothing after it is an error."""
        error = parse_error("$")
        assert error.message == "Empty sequence after $"

    def test_empty_sequence_in_argument(self) -> None:
        """An empty sequence inside an argument list is an error."""
        error = parse_error("seq($, 2)")
        assert error.message == "Empty sequence after $"
        assert error.column == 6


class TestCommands:
    """Tests for command calls."""

    def test_seq_command(self) -> None:
        """Numbers in argument position carry counts."""
        ast = parse_ok("seq($dh2v, 3)")
        assert isinstance(ast, CommandNode)
        assert ast.name == "seq"
        assert len(ast.args) == 2
        assert ast.args[1] == SymbolNode(char="x", rotated=False, count=3)

    def test_command_name_lowercased(self) -> None:
        """Command names are normalized to lowercase."""
        assert parse_ok("MIR($d)").name == "mir"

    def test_no_arguments(self) -> None:
        """Empty argument lists parse; arity is checked later."""
        assert parse_ok("mir()") == CommandNode(name="mir", args=())

    def test_identifier_argument_without_paren_is_symbol_run(self) -> None:
        """An identifier not followed by '(' is read as glyphs."""
        ast = parse_ok("seq(dh, 2)")
        assert ast.args[0] == SequenceNode(patterns=(SymbolNode(char="d"), SymbolNode(char="h")))

    def test_nested_commands(self) -> None:
        """Commands nest inside arguments."""
        ast = parse_ok("seq(mir($dh), space($d, $l, 1), 2)")
        assert [a.type for a in ast.args] == ["command", "command", "symbol"]
        assert ast.args[0].name == "mir"
        assert ast.args[1].name == "space"

    def test_variable_reference_argument(self) -> None:
        """@name arguments become references."""
        ast = parse_ok("seq(@petal, 2)")
        assert ast.args[0] == VariableReferenceNode(name="petal")

    def test_single_letter_variable(self) -> None:
        """Single-letter names lex as symbols but are still valid names."""
        assert parse_ok("@a") == VariableReferenceNode(name="a")

    def test_missing_comma(self) -> None:
        """Two arguments without a comma are an error."""
        error = parse_error("seq($d $h)")
        assert error.message == "Expected comma or closing parenthesis"

    def test_missing_close_paren(self) -> None:
        """Running out of input inside a command is an error."""
        error = parse_error("seq($d, 3")
        assert error.message == "Expected comma or closing parenthesis"

    def test_unexpected_argument_location(self) -> None:
        """Errors carry offset, line and column of the bad token."""
        error = parse_error("seq($d, ])")
        assert error.message == "Unexpected token in argument: ]"
        assert (error.position, error.line, error.column) == (8, 1, 9)

    def test_variable_name_required(self) -> None:
        """@ must be followed by a name."""
        error = parse_error("seq(@, 2)")
        assert error.message == "Expected identifier, got comma"


class TestTopLevel:
    """Tests for the element count suffix and input boundaries."""

    def test_element_count(self) -> None:
        """:N wraps the pattern."""
        assert parse_ok("dh:5") == ElementCountNode(
            pattern=SequenceNode(patterns=(SymbolNode(char="d"), SymbolNode(char="h"))),
            count=5,
        )

    def test_element_count_on_command(self) -> None:
        """:N applies to commands too."""
        ast = parse_ok("seq($dh2v, 3):128")
        assert isinstance(ast, ElementCountNode)
        assert ast.count == 128
        assert isinstance(ast.pattern, CommandNode)

    def test_element_count_requires_number(self) -> None:
        """A colon must be followed by a number."""
        error = parse_error("dh:")
        assert error.message == "Expected number, got eof"

    def test_leading_colon(self) -> None:
        """A pattern cannot start with a colon."""
        error = parse_error(":5")
        assert error.message == "Unexpected token: :"

    def test_empty_input(self) -> None:
        """Empty input has no pattern."""
        error = parse_error("")
        assert error.message == "Unexpected token: end of input"

    def test_solid_ring_marker_is_not_a_pattern(self) -> None:
        """A lone '-' is skipped by the lexer, leaving nothing to parse."""
        error = parse_error("-")
        assert error.message == "Unexpected token: end of input"
        assert error.column == 2

    def test_trailing_input(self) -> None:
        """Tokens after a complete pattern are rejected."""
        error = parse_error("dh )")
        assert error.message == "Unexpected trailing input: )"
        assert error.column == 4

    def test_top_level_variable_reference(self) -> None:
        """A whole pattern may be a reference."""
        assert parse_ok("@stem:12") == ElementCountNode(
            pattern=VariableReferenceNode(name="stem"), count=12
        )

    def test_multiline_error_location(self) -> None:
        """Line and column follow newlines in the input."""
        error = parse_error("seq($d,\n  ])")
        assert (error.line, error.column) == (2, 3)


class TestNumbers:
    """Tests for count and number validation."""

    def test_zero_symbol_count(self) -> None:
        """A glyph repeated 0 times is rejected where it is written."""
        error = parse_error("$h d0")
        assert error.message == "Count must be at least 1, got 0"
        assert error.column == 4

    def test_zero_command_count(self) -> None:
        """seq and space counts start at 1."""
        error = parse_error("seq($d, 0)")
        assert error.message == "Count must be at least 1, got 0"
        assert error.column == 9

    def test_zero_element_count_allowed(self) -> None:
        """Only :N may be 0."""
        assert parse_ok("dh:0") == ElementCountNode(
            pattern=SequenceNode(patterns=(SymbolNode(char="d"), SymbolNode(char="h"))),
            count=0,
        )

    @pytest.mark.parametrize(
        "text",
        ["d" + "1" * 5000, "seq($d, " + "2" * 5000 + ")", "dh:" + "3" * 5000],
    )
    def test_overlong_number(self, text: str) -> None:
        """Huge digit runs are a parse error rather than an exception."""
        error = parse_error(text)
        assert error.message == "Number literal too long: 5000 digits"


class TestDepthLimit:
    """Tests for the explicit nesting limit."""

    def test_within_limit(self) -> None:
        """Nesting up to the limit parses."""
        text = "mir(" * 3 + "d" + ")" * 3
        assert Parser(text, max_depth=3).parse().success

    def test_exceeds_limit(self) -> None:
        """Nesting past the limit is a parse error, not a crash."""
        text = "mir(" * 4 + "d" + ")" * 4
        error = parse_error(text, max_depth=3)
        assert error.message == "Maximum nesting depth of 3 exceeded"

    def test_default_limit_on_deep_input(self) -> None:
        """Pathologically deep input fails cleanly with the default limit."""
        text = "mir(" * 500 + "d" + ")" * 500
        error = parse_error(text)
        assert "Maximum nesting depth" in error.message


class TestParseResult:
    """Tests for ParseResult behavior."""

    def test_idempotent(self) -> None:
        """Parsing the same input twice gives equal ASTs."""
        text = "seq(mir($dH2), space($d, $l, 1), 2):40"
        assert Parser(text).parse().ast == Parser(text).parse().ast

    def test_truthiness(self) -> None:
        """Results are truthy iff successful."""
        assert Parser("d").parse()
        assert not Parser("$").parse()

    def test_to_dict(self) -> None:
        """Serialization includes the tagged AST."""
        d = Parser("mir($d)").parse().to_dict()
        assert d["success"] is True
        assert d["ast"]["type"] == "command"
        assert d["ast"]["args"][0]["type"] == "sequence"

    def test_error_to_dict(self) -> None:
        """Errors serialize with their location."""
        d = Parser("$").parse().to_dict()
        assert d["success"] is False
        assert d["error"] == {
            "message": "Empty sequence after $",
            "position": 1,
            "line": 1,
            "column": 2,
        }

    @pytest.mark.parametrize("text", ["d", "$dh", "seq($d, 2)", "dh:3"])
    def test_result_type(self, text: str) -> None:
        """parse() always returns a ParseResult."""
        assert isinstance(Parser(text).parse(), ParseResult)
