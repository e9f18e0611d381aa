"""
Pattern tools - MCP tools for parsing, expanding and compiling patterns.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_wheelgen.constants import DEFAULT_MAX_DEPTH
from chuk_mcp_wheelgen.language import (
    COMMANDS,
    compile_pattern,
    is_pattern_language,
    items_to_flat,
    parse_pattern,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_pattern_tools(
    mcp: ChukMCPServer, max_depth: int = DEFAULT_MAX_DEPTH
) -> dict[str, Any]:
    """
    Register pattern tools with the MCP server.

    Args:
        mcp: The MCP server instance
        max_depth: Nesting limit for every pattern the tools parse

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def wheelgen_parse_pattern(pattern: str) -> str:
        """
        Parse and expand a pattern expression.

        Returns the AST, the expanded symbol list and its flat form.

        Args:
            pattern: Pattern expression (e.g. 'seq($dh2v, 3)', 'mir($dhlv)', 'dh:5')

        Returns:
            JSON string with AST, expanded symbols and flat notation

        Example:
            wheelgen_parse_pattern(pattern="space($d, $h, $l, 2)")
        """
        try:
            result = parse_pattern(pattern, max_depth=max_depth)
            if not result.success:
                return json.dumps(
                    {
                        "status": "error",
                        "message": result.error.message if result.error else "Parse failed",
                        "error": result.error.to_dict() if result.error else None,
                    }
                )

            expanded = result.expanded or []
            return json.dumps(
                {
                    "status": "success",
                    "ast": result.ast.model_dump(mode="json") if result.ast else None,
                    "expanded": [item.model_dump() for item in expanded],
                    "flat": items_to_flat(expanded),
                    "count": len(expanded),
                }
            )
        except Exception as e:
            logger.exception("Failed to parse pattern")
            return json.dumps({"status": "error", "message": str(e)})

    tools["wheelgen_parse_pattern"] = wheelgen_parse_pattern

    @mcp.tool  # type: ignore[arg-type]
    async def wheelgen_compile_pattern(pattern: str) -> str:
        """
        Compile a pattern expression down to flat legacy notation.

        Args:
            pattern: Pattern expression

        Returns:
            JSON string with the flat string

        Example:
            wheelgen_compile_pattern(pattern="seq($dh, 3)")
        """
        try:
            result = parse_pattern(pattern, max_depth=max_depth)
            if not result.success or result.ast is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": result.error.message if result.error else "Parse failed",
                    }
                )

            return json.dumps(
                {
                    "status": "success",
                    "pattern": pattern,
                    "flat": compile_pattern(result.ast),
                }
            )
        except Exception as e:
            logger.exception("Failed to compile pattern")
            return json.dumps({"status": "error", "message": str(e)})

    tools["wheelgen_compile_pattern"] = wheelgen_compile_pattern

    @mcp.tool  # type: ignore[arg-type]
    async def wheelgen_list_commands() -> str:
        """
        List pattern commands with arity, description and an example.

        Returns:
            JSON string with command definitions
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "commands": [command.to_dict() for command in COMMANDS],
                    "count": len(COMMANDS),
                }
            )
        except Exception as e:
            logger.exception("Failed to list commands")
            return json.dumps({"status": "error", "message": str(e)})

    tools["wheelgen_list_commands"] = wheelgen_list_commands

    @mcp.tool  # type: ignore[arg-type]
    async def wheelgen_check_syntax(text: str) -> str:
        """
        Check whether text uses pattern-language syntax or flat notation.

        Args:
            text: Pattern text

        Returns:
            JSON string with the detected syntax
        """
        try:
            uses_language = is_pattern_language(text)
            return json.dumps(
                {
                    "status": "success",
                    "pattern_language": uses_language,
                    "syntax": "pattern" if uses_language else "flat",
                }
            )
        except Exception as e:
            logger.exception("Failed to check syntax")
            return json.dumps({"status": "error", "message": str(e)})

    tools["wheelgen_check_syntax"] = wheelgen_check_syntax

    return tools
