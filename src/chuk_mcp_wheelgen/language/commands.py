"""
Command metadata for help surfaces.

The compiler does not consult this table; arity is enforced by the
expander. It exists for UIs and tools that list what commands do.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from chuk_mcp_wheelgen.constants import PATTERN_LANGUAGE_MARKERS


@dataclass(frozen=True)
class CommandDefinition:
    """Description of one pattern command."""

    name: str
    min_args: int
    description: str
    example: str
    max_args: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


COMMANDS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="seq",
        min_args=3,
        description="Sequence patterns together, repeat n times",
        example="seq($d, $h, $l, 3) → dhldhldhl",
    ),
    CommandDefinition(
        name="mir",
        min_args=1,
        max_args=1,
        description="Mirror/reverse pattern",
        example="mir($dhlv) → vlhd",
    ),
    CommandDefinition(
        name="space",
        min_args=3,
        description="Add spacing between patterns",
        example="space($dhl, 2) → dxxhxxl",
    ),
)


def get_command(name: str) -> CommandDefinition | None:
    """Look up a command by name (case-insensitive)."""
    lowered = name.lower()
    for command in COMMANDS:
        if command.name == lowered:
            return command
    return None


def is_pattern_language(text: str) -> bool:
    """
    Heuristic: does this text use pattern-language syntax?

    Flat legacy strings (e.g. 'dh2v') contain none of the markers.
    """
    return any(marker in text for marker in PATTERN_LANGUAGE_MARKERS)
