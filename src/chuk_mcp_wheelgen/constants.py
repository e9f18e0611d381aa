"""
Constants and enums for the pattern language.

No magic strings - use enums and frozensets for constrained values.
"""

from enum import Enum

# Base calligraphic glyphs (x is the spacer)
BASE_SYMBOLS = frozenset("dhlvx")
SPACER_SYMBOL = "x"

# Solid ring marker understood by flat-string consumers
SOLID_RING = "-"

# Names that always lex as identifiers (pattern commands + color functions)
COMMAND_NAMES = frozenset(
    {
        "seq",
        "mir",
        "space",
        "triadic",
        "complementary",
        "tetradic",
        "analogous",
        "rgb",
        "hsb",
    }
)

# Substrings that mark text as pattern-language (vs. flat legacy grammar)
PATTERN_LANGUAGE_MARKERS = ("$", "seq(", "mir(", "space(", ":")

# Nested command limit for the recursive-descent parser
DEFAULT_MAX_DEPTH = 64

COMMENT_PREFIX = ";;"


class Section(str, Enum):
    """
    Document scanner states.

    Every state except NONE is entered by its exact header line.
    """

    NONE = "none"
    RINGS = "rings"
    DOT = "dot"
    GUIDES = "guides"
    VARIABLES = "variables"
    PALETTE = "palette"

    @property
    def header(self) -> str | None:
        """Header line that opens this section."""
        if self is Section.NONE:
            return None
        return f"{self.value}:"


SECTION_HEADERS: dict[str, Section] = {
    section.header: section for section in Section if section.header is not None
}

# Color literal component ranges
RGB_RANGE = (0, 255)
HUE_RANGE = (0, 360)
PERCENT_RANGE = (0, 100)


class ErrorMessages:
    """Standardized error messages."""

    UNEXPECTED_TOKEN = "Unexpected token: {value}"
    UNEXPECTED_ARGUMENT = "Unexpected token in argument: {value}"
    EXPECTED_TOKEN = "Expected {expected}, got {actual}"
    EMPTY_SEQUENCE = "Empty sequence after $"
    EXPECTED_COMMA = "Expected comma or closing parenthesis"
    TRAILING_INPUT = "Unexpected trailing input: {value}"
    MAX_DEPTH = "Maximum nesting depth of {limit} exceeded"
    INVALID_COUNT = "Count must be at least 1, got {value}"
    NUMBER_TOO_LONG = "Number literal too long: {length} digits"

    MIN_ARGS = "{name} command requires at least {count} arguments"
    EXACT_ARGS = "{name} command requires exactly {count} argument"
    MISSING_COUNT = "{name} command requires a count as the last argument"
    UNKNOWN_COMMAND = "Unknown command: {name}"
    UNKNOWN_NODE = "Unknown node type: {type}"
    UNKNOWN_SYMBOL = "Unknown symbol: {char}"
    UNRESOLVED_VARIABLE = "Unresolved variable reference: @{name}"
    CIRCULAR_VARIABLE = "Circular variable reference: @{name}"

    INVALID_RING = "Invalid ring definition: {line}"
    INVALID_RING_VALUES = "Ring radius and element count must be positive: {line}"
    INVALID_VARIABLE = "Invalid variable definition: {line}"
    INVALID_PALETTE = "Invalid palette definition: {line}"
    INVALID_COLOR = "Invalid color expression: {expression}"
