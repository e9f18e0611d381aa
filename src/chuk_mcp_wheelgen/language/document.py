"""
Document Parser - line scanner for whole-artwork documents.

A document is a sequence of sections, each opened by an exact header line
and closed by the next header or a blank line:

    rings:
    O(9, 128): seq($dh2v, 3)
    O(12, 64): mir($dhl):64 [A, B]

    variables:
    @petal = $dh2

    palette:
    A = triadic(baseHue: 180, saturation: 85)
    B = rgb(255, 128, 64)

    dot:
    size: 4
    visible: true

Lines starting with ';;' are comments. Lines outside any section are tried
as legacy 'O(radius, count): pattern' ring lines.

The rings, variables and palette sections are strict: the first malformed
line aborts the parse. The dot and guides sections ignore what they do
not understand.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from chuk_mcp_wheelgen.constants import (
    COMMENT_PREFIX,
    DEFAULT_MAX_DEPTH,
    HUE_RANGE,
    PERCENT_RANGE,
    RGB_RANGE,
    SECTION_HEADERS,
    ErrorMessages,
    Section,
)
from chuk_mcp_wheelgen.language.errors import DocumentError, ParseError
from chuk_mcp_wheelgen.language.expander import nesting_depth
from chuk_mcp_wheelgen.language.parser import Parser
from chuk_mcp_wheelgen.models.document import (
    ColorFunction,
    ColorHsb,
    ColorNode,
    ColorReference,
    ColorRgb,
    DocumentAST,
    DotDefinition,
    GuidesDefinition,
    RingDefinition,
    VariableDefinition,
)
from chuk_mcp_wheelgen.models.pattern import (
    CommandNode,
    ElementCountNode,
    PatternNode,
    SequenceNode,
    VariableReferenceNode,
)

logger = logging.getLogger(__name__)

RING_LINE = re.compile(r"^O\((\d+(?:\.\d+)?),\s*(\d+)\):\s*(.+)$")
RING_COLORS = re.compile(r"^(.*?)\s*\[\s*([A-Z](?:\s*,\s*[A-Z])*)\s*\]$")
VARIABLE_LINE = re.compile(r"^@(\w+)\s*=\s*(.+)$")
PALETTE_LINE = re.compile(r"^([A-Z])\s*=\s*(.+)$")
DOT_LINE = re.compile(r"^(\w+):\s*(.+)$")

COLOR_REFERENCE = re.compile(r"^[A-Z]$")
COLOR_RGB = re.compile(r"^rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)$", re.IGNORECASE)
COLOR_HSB = re.compile(r"^hsb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)$", re.IGNORECASE)
COLOR_FUNCTION = re.compile(r"^([A-Za-z]\w*)\((.*)\)$")
COLOR_PARAM = re.compile(r"^\s*(\w+)\s*:\s*(-?\d+(?:\.\d+)?)\s*$")


def _in_range(value: int, bounds: tuple[int, int]) -> bool:
    return bounds[0] <= value <= bounds[1]


def parse_color_expression(expression: str) -> ColorNode | None:
    """
    Parse a palette color expression.

    Forms:
    - rgb(r, g, b)               -> ColorRgb (0-255 each)
    - hsb(h, s, b)               -> ColorHsb (h 0-360, s/b 0-100)
    - name(key: value, ...)      -> ColorFunction
    - A                          -> ColorReference to another palette letter

    Args:
        expression: Expression text

    Returns:
        ColorNode, or None if the expression is not valid
    """
    text = expression.strip()

    if COLOR_REFERENCE.match(text):
        return ColorReference(name=text)

    rgb_match = COLOR_RGB.match(text)
    if rgb_match:
        try:
            r, g, b = (int(v) for v in rgb_match.groups())
        except ValueError:
            return None
        if not all(_in_range(v, RGB_RANGE) for v in (r, g, b)):
            return None
        return ColorRgb(r=r, g=g, b=b)

    hsb_match = COLOR_HSB.match(text)
    if hsb_match:
        try:
            h, s, b = (int(v) for v in hsb_match.groups())
        except ValueError:
            return None
        if not (
            _in_range(h, HUE_RANGE) and _in_range(s, PERCENT_RANGE) and _in_range(b, PERCENT_RANGE)
        ):
            return None
        return ColorHsb(h=h, s=s, b=b)

    func_match = COLOR_FUNCTION.match(text)
    if not func_match:
        return None

    name = func_match.group(1).lower()
    if name in ("rgb", "hsb"):
        # Literal forms with the wrong shape
        return None

    params: dict[str, float] = {}
    params_text = func_match.group(2)
    if params_text.strip():
        for pair in params_text.split(","):
            param_match = COLOR_PARAM.match(pair)
            if not param_match:
                return None
            params[param_match.group(1)] = float(param_match.group(2))

    return ColorFunction(name=name, params=params)


@dataclass
class DocumentParseResult:
    """
    Result of parsing a document.

    Truthy iff parsing succeeded.
    """

    success: bool
    ast: DocumentAST | None = None
    error: ParseError | None = None

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        d: dict[str, Any] = {"success": self.success}
        if self.ast is not None:
            d["ast"] = self.ast.model_dump(mode="json")
        if self.error is not None:
            d["error"] = self.error.to_dict()
        return d


class DocumentParser:
    """
    Parses an artwork document into a DocumentAST.

    A parser owns its cursor and variable table; use a fresh instance
    per document.
    """

    def __init__(
        self,
        text: str,
        resolve_variables: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """
        Initialize the parser.

        Args:
            text: Document source
            resolve_variables: Substitute @name references in rings and
                later variables with the definitions seen so far
            max_depth: Nesting limit for each pattern, also applied after
                variables are substituted
        """
        self.text = text
        self.resolve_variables = resolve_variables
        self.max_depth = max_depth
        self.variables: dict[str, PatternNode] = {}
        self._depths: dict[str, int] = {}

        self._section = Section.NONE
        self._line_number = 0
        self._line_offset = 0

    def parse(self) -> DocumentParseResult:
        """
        Parse the whole document.

        Returns:
            DocumentParseResult with the AST, or the first error found
        """
        rings: list[RingDefinition] = []
        variables: list[VariableDefinition] = []
        palette: dict[str, ColorNode] = {}
        dot_fields: dict[str, Any] = {}
        seen: set[Section] = set()

        try:
            for line_number, raw in enumerate(self.text.split("\n"), start=1):
                self._line_number = line_number
                line = raw.strip()
                indent = len(raw) - len(raw.lstrip())

                if line in SECTION_HEADERS:
                    self._section = SECTION_HEADERS[line]
                    seen.add(self._section)
                elif not line:
                    self._section = Section.NONE
                elif line.startswith(COMMENT_PREFIX):
                    pass
                elif self._section == Section.RINGS:
                    rings.append(self._parse_ring(line, indent))
                elif self._section == Section.DOT:
                    self._parse_dot_property(line, dot_fields)
                elif self._section == Section.GUIDES:
                    logger.debug("Ignoring guides line %d: %s", self._line_number, line)
                elif self._section == Section.VARIABLES:
                    variables.append(self._parse_variable(line, indent))
                elif self._section == Section.PALETTE:
                    name, color = self._parse_palette_entry(line)
                    palette[name] = color
                else:
                    ring = self._try_legacy_ring(line, indent)
                    if ring is not None:
                        rings.append(ring)

                self._line_offset += len(raw) + 1

        except DocumentError as e:
            logger.debug("Document parse failed: %s", e.error)
            return DocumentParseResult(success=False, error=e.error)

        ast = DocumentAST(
            rings=rings,
            dot=DotDefinition(**dot_fields) if Section.DOT in seen else None,
            guides=GuidesDefinition() if Section.GUIDES in seen else None,
            variables=variables,
            palette=palette if Section.PALETTE in seen else None,
        )
        return DocumentParseResult(success=True, ast=ast)

    # -- sections --

    def _parse_ring(self, line: str, indent: int) -> RingDefinition:
        match = RING_LINE.match(line)
        if not match:
            raise DocumentError.at_line(ErrorMessages.INVALID_RING.format(line=line), self._line_number)
        return self._build_ring(match, line, indent)

    def _try_legacy_ring(self, line: str, indent: int) -> RingDefinition | None:
        """Ring line outside any section; anything unparsable is skipped."""
        match = RING_LINE.match(line)
        if not match:
            logger.debug("Ignoring line %d outside any section: %s", self._line_number, line)
            return None
        try:
            return self._build_ring(match, line, indent)
        except DocumentError as e:
            logger.debug("Ignoring legacy ring on line %d: %s", self._line_number, e.error.message)
            return None

    def _build_ring(self, match: re.Match[str], line: str, indent: int) -> RingDefinition:
        radius = float(match.group(1))
        count_digits = match.group(2)
        try:
            element_count = int(count_digits)
        except ValueError:
            raise DocumentError.at_line(
                ErrorMessages.NUMBER_TOO_LONG.format(length=len(count_digits)),
                self._line_number,
            ) from None
        if not math.isfinite(radius) or radius <= 0 or element_count <= 0:
            raise DocumentError.at_line(
                ErrorMessages.INVALID_RING_VALUES.format(line=line), self._line_number
            )

        pattern_text = match.group(3)
        colors: list[str] | None = None
        colors_match = RING_COLORS.match(pattern_text)
        if colors_match:
            pattern_text = colors_match.group(1)
            colors = [c.strip() for c in colors_match.group(2).split(",")]

        pattern, _ = self._parse_pattern_text(pattern_text, indent + match.start(3))
        return RingDefinition(
            radius=radius,
            element_count=element_count,
            pattern=pattern,
            colors=colors,
        )

    def _parse_dot_property(self, line: str, fields: dict[str, Any]) -> None:
        match = DOT_LINE.match(line)
        if not match:
            logger.debug("Ignoring dot line %d: %s", self._line_number, line)
            return

        key, value = match.group(1), match.group(2).strip()
        if key == "size":
            try:
                fields["size"] = float(value)
            except ValueError:
                logger.debug("Ignoring dot size %r on line %d", value, self._line_number)
        elif key == "color":
            fields["color"] = value
        elif key == "visible" and value.lower() in ("true", "false"):
            fields["visible"] = value.lower() == "true"
        else:
            logger.debug("Ignoring dot property %r on line %d", key, self._line_number)

    def _parse_variable(self, line: str, indent: int) -> VariableDefinition:
        match = VARIABLE_LINE.match(line)
        if not match:
            raise DocumentError.at_line(
                ErrorMessages.INVALID_VARIABLE.format(line=line), self._line_number
            )

        name = match.group(1)
        pattern, depth = self._parse_pattern_text(match.group(2), indent + match.start(2))

        # Later definitions overwrite earlier ones
        self.variables[name] = pattern
        self._depths[name] = depth
        return VariableDefinition(name=name, pattern=pattern)

    def _parse_palette_entry(self, line: str) -> tuple[str, ColorNode]:
        match = PALETTE_LINE.match(line)
        if not match:
            raise DocumentError.at_line(
                ErrorMessages.INVALID_PALETTE.format(line=line), self._line_number
            )

        expression = match.group(2)
        color = parse_color_expression(expression)
        if color is None:
            raise DocumentError.at_line(
                ErrorMessages.INVALID_COLOR.format(expression=expression), self._line_number
            )
        return match.group(1), color

    # -- patterns --

    def _parse_pattern_text(self, text: str, start_column: int) -> tuple[PatternNode, int]:
        """
        Parse embedded pattern text, relocating errors into the document.

        Args:
            text: Pattern source
            start_column: 0-based column of the pattern text in the raw line

        Returns:
            The pattern (substituted when resolving) and its nesting depth
        """
        result = Parser(text, max_depth=self.max_depth).parse()
        if not result.success or result.ast is None:
            error = result.error or ParseError(message="Invalid pattern")
            column = start_column + error.column
            raise DocumentError(
                ParseError(
                    message=error.message,
                    position=self._line_offset + column - 1,
                    line=self._line_number,
                    column=column,
                )
            )

        if not self.resolve_variables:
            return result.ast, nesting_depth(result.ast)

        # Splicing in stored definitions can nest deeper than any single line;
        # stored depths stand in for the (shared) spliced subtrees
        pattern = self._substitute(result.ast)
        depth = nesting_depth(result.ast, self._depths)
        if depth > self.max_depth:
            raise DocumentError.at_line(
                ErrorMessages.MAX_DEPTH.format(limit=self.max_depth), self._line_number
            )
        return pattern, depth

    def _substitute(self, node: PatternNode) -> PatternNode:
        """Replace @name references with the definitions seen so far."""
        if isinstance(node, VariableReferenceNode):
            if node.name not in self.variables:
                raise DocumentError.at_line(
                    ErrorMessages.UNRESOLVED_VARIABLE.format(name=node.name), self._line_number
                )
            return self.variables[node.name]
        if isinstance(node, SequenceNode):
            patterns = tuple(self._substitute(p) for p in node.patterns)
            return node.model_copy(update={"patterns": patterns})
        if isinstance(node, CommandNode):
            args = tuple(self._substitute(a) for a in node.args)
            return node.model_copy(update={"args": args})
        if isinstance(node, ElementCountNode):
            return node.model_copy(update={"pattern": self._substitute(node.pattern)})
        return node
