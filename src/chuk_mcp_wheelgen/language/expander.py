"""
Pattern Expander - walks a pattern AST and produces concrete symbols.

Expansion rules:
- symbol: ``count`` copies of the glyph
- sequence: concatenation, the whole list repeated ``count`` times
- seq(p1, ..., pk, n): p1..pk concatenated, repeated n times
- mir(p): element order reversed, rotation flags untouched
- space(p1, ..., pk, n): n unrotated 'x' spacers between consecutive groups;
  a single pattern argument is split into its top-level parts
- pattern:N: full repeats plus a truncated remainder, exactly N items
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from chuk_mcp_wheelgen.constants import (
    BASE_SYMBOLS,
    DEFAULT_MAX_DEPTH,
    SPACER_SYMBOL,
    ErrorMessages,
)
from chuk_mcp_wheelgen.language.errors import ExpansionError
from chuk_mcp_wheelgen.models.pattern import (
    CommandNode,
    ElementCountNode,
    GrammarItem,
    PatternNode,
    SequenceNode,
    SymbolNode,
    VariableReferenceNode,
)


class PatternExpander:
    """
    Expands pattern ASTs to GrammarItem lists.

    The expander is pure: it never mutates its input and returns a new
    list on every call.
    """

    def __init__(
        self,
        variables: Mapping[str, PatternNode] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """
        Initialize the expander.

        Args:
            variables: Optional name -> AST table used to resolve @name
                references. Without it, references are an error.
            max_depth: Maximum nesting of commands and variable references
        """
        self.variables = variables
        self.max_depth = max_depth
        self._depth = 0

    def expand(self, ast: PatternNode) -> list[GrammarItem]:
        """
        Expand an AST.

        Args:
            ast: Root pattern node

        Returns:
            Concrete symbols in order

        Raises:
            ExpansionError: On bad arity, unknown commands/nodes/symbols or
                unresolved variables
        """
        return self._expand_node(ast, ())

    def _expand_node(self, node: PatternNode, resolving: tuple[str, ...]) -> list[GrammarItem]:
        if isinstance(node, SymbolNode):
            return self._expand_symbol(node)
        if isinstance(node, SequenceNode):
            return self._expand_sequence(node, resolving)
        if isinstance(node, CommandNode):
            return self._expand_command(node, resolving)
        if isinstance(node, ElementCountNode):
            return self._expand_element_count(node, resolving)
        if isinstance(node, VariableReferenceNode):
            return self._expand_variable(node, resolving)

        node_type = getattr(node, "type", type(node).__name__)
        raise ExpansionError(ErrorMessages.UNKNOWN_NODE.format(type=node_type))

    def _expand_symbol(self, node: SymbolNode) -> list[GrammarItem]:
        if node.char not in BASE_SYMBOLS:
            raise ExpansionError(ErrorMessages.UNKNOWN_SYMBOL.format(char=node.char))
        item = GrammarItem(char=node.char, rotated=node.rotated)
        return [item] * node.count

    def _expand_sequence(
        self, node: SequenceNode, resolving: tuple[str, ...]
    ) -> list[GrammarItem]:
        items: list[GrammarItem] = []
        for pattern in node.patterns:
            items.extend(self._expand_node(pattern, resolving))

        if node.count is not None:
            items = items * node.count
        return items

    def _expand_command(self, node: CommandNode, resolving: tuple[str, ...]) -> list[GrammarItem]:
        with self._nested():
            if node.name == "seq":
                return self._expand_seq(node, resolving)
            if node.name == "mir":
                return self._expand_mir(node, resolving)
            if node.name == "space":
                return self._expand_space(node, resolving)

        raise ExpansionError(ErrorMessages.UNKNOWN_COMMAND.format(name=node.name))

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Track one level of nesting; fail past the configured limit."""
        if self._depth >= self.max_depth:
            raise ExpansionError(ErrorMessages.MAX_DEPTH.format(limit=self.max_depth))
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _expand_seq(self, node: CommandNode, resolving: tuple[str, ...]) -> list[GrammarItem]:
        patterns, repeat = self._split_count(node)

        group: list[GrammarItem] = []
        for pattern in patterns:
            group.extend(self._expand_node(pattern, resolving))
        return group * repeat

    def _expand_mir(self, node: CommandNode, resolving: tuple[str, ...]) -> list[GrammarItem]:
        if len(node.args) != 1:
            raise ExpansionError(ErrorMessages.EXACT_ARGS.format(name="mir", count=1))

        items = self._expand_node(node.args[0], resolving)
        return items[::-1]

    def _expand_space(self, node: CommandNode, resolving: tuple[str, ...]) -> list[GrammarItem]:
        patterns, spacers = self._split_count(node)
        if len(patterns) == 1:
            # space($dhl, 2): the sequence's parts are the groups
            patterns = _components(patterns[0])
        spacer = GrammarItem(char=SPACER_SYMBOL, rotated=False)

        items: list[GrammarItem] = []
        for index, pattern in enumerate(patterns):
            if index > 0:
                items.extend([spacer] * spacers)
            items.extend(self._expand_node(pattern, resolving))
        return items

    def _split_count(self, node: CommandNode) -> tuple[tuple[PatternNode, ...], int]:
        """
        Separate a seq/space argument list from its trailing count.

        The count is the last argument, parsed as a symbol node carrying
        the number in ``count``.
        """
        if len(node.args) < 2:
            raise ExpansionError(ErrorMessages.MIN_ARGS.format(name=node.name, count=2))

        last = node.args[-1]
        if not isinstance(last, SymbolNode):
            raise ExpansionError(ErrorMessages.MISSING_COUNT.format(name=node.name))

        return node.args[:-1], last.count

    def _expand_element_count(
        self, node: ElementCountNode, resolving: tuple[str, ...]
    ) -> list[GrammarItem]:
        items = self._expand_node(node.pattern, resolving)
        if not items:
            return []

        full_repeats, remainder = divmod(node.count, len(items))
        return items * full_repeats + items[:remainder]

    def _expand_variable(
        self, node: VariableReferenceNode, resolving: tuple[str, ...]
    ) -> list[GrammarItem]:
        if self.variables is None or node.name not in self.variables:
            raise ExpansionError(ErrorMessages.UNRESOLVED_VARIABLE.format(name=node.name))
        if node.name in resolving:
            raise ExpansionError(ErrorMessages.CIRCULAR_VARIABLE.format(name=node.name))

        with self._nested():
            return self._expand_node(self.variables[node.name], resolving + (node.name,))


def _components(node: PatternNode) -> tuple[PatternNode, ...]:
    """Top-level parts of an unrepeated sequence, unwrapping single-child wrappers."""
    while isinstance(node, SequenceNode) and node.count is None and len(node.patterns) == 1:
        node = node.patterns[0]
    if isinstance(node, SequenceNode) and node.count is None:
        return node.patterns
    return (node,)


def nesting_depth(
    node: PatternNode, reference_depths: Mapping[str, int] | None = None
) -> int:
    """
    Nesting of commands and variable references in an AST.

    This is the measure the expander limits. A pattern the parser accepts
    never exceeds the parser's own limit by this measure.

    Args:
        node: Root pattern node
        reference_depths: Depths of already-substituted definitions. A
            reference named here counts as its definition's depth instead
            of one level.
    """
    if isinstance(node, CommandNode):
        return 1 + max((nesting_depth(arg, reference_depths) for arg in node.args), default=0)
    if isinstance(node, SequenceNode):
        return max((nesting_depth(p, reference_depths) for p in node.patterns), default=0)
    if isinstance(node, ElementCountNode):
        return nesting_depth(node.pattern, reference_depths)
    if isinstance(node, VariableReferenceNode):
        if reference_depths is not None and node.name in reference_depths:
            return reference_depths[node.name]
        return 1
    return 0


def expand(
    ast: PatternNode,
    variables: Mapping[str, PatternNode] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[GrammarItem]:
    """
    Convenience function to expand an AST.

    Args:
        ast: Root pattern node
        variables: Optional variable table for @name references
        max_depth: Nesting limit for commands and variable references

    Returns:
        Concrete symbols in order
    """
    return PatternExpander(variables, max_depth).expand(ast)
