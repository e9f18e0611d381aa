"""
Document tools - MCP tools for parsing and exporting artwork documents.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import yaml

from chuk_mcp_wheelgen.constants import DEFAULT_MAX_DEPTH
from chuk_mcp_wheelgen.language import (
    ExpansionError,
    PatternExpander,
    items_to_flat,
    parse_document,
)
from chuk_mcp_wheelgen.models import DocumentAST, ElementCountNode

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _compile_rings(ast: DocumentAST, max_depth: int) -> list[dict[str, Any]]:
    """Fit each ring's pattern to its element count."""
    expander = PatternExpander({v.name: v.pattern for v in ast.variables}, max_depth)
    rings = []
    for index, ring in enumerate(ast.rings):
        entry: dict[str, Any] = {
            "index": index,
            "radius": ring.radius,
            "element_count": ring.element_count,
            "colors": ring.colors,
        }
        try:
            items = expander.expand(ElementCountNode(pattern=ring.pattern, count=ring.element_count))
            entry["flat"] = items_to_flat(items)
            entry["elements"] = [str(item) for item in items]
        except ExpansionError as e:
            entry["error"] = e.error.message
        rings.append(entry)
    return rings


def register_document_tools(
    mcp: ChukMCPServer, max_depth: int = DEFAULT_MAX_DEPTH
) -> dict[str, Any]:
    """
    Register document tools with the MCP server.

    Args:
        mcp: The MCP server instance
        max_depth: Nesting limit for every pattern the tools parse

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def wheelgen_parse_document(document: str) -> str:
        """
        Parse an artwork document.

        Returns the document AST plus, for every ring, its pattern expanded
        and fitted to the ring's element count.

        Args:
            document: Document text with rings:, dot:, guides:, variables:, palette: sections

        Returns:
            JSON string with the AST and compiled rings

        Example:
            wheelgen_parse_document(document="rings:\\nO(9, 128): seq($dh2v, 3)")
        """
        try:
            result = parse_document(document, max_depth=max_depth)
            if not result.success or result.ast is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": result.error.message if result.error else "Parse failed",
                        "error": result.error.to_dict() if result.error else None,
                    }
                )

            return json.dumps(
                {
                    "status": "success",
                    "document": result.ast.model_dump(mode="json"),
                    "rings": _compile_rings(result.ast, max_depth),
                }
            )
        except Exception as e:
            logger.exception("Failed to parse document")
            return json.dumps({"status": "error", "message": str(e)})

    tools["wheelgen_parse_document"] = wheelgen_parse_document

    @mcp.tool  # type: ignore[arg-type]
    async def wheelgen_export_document_yaml(document: str) -> str:
        """
        Export a parsed document as YAML.

        Useful for inspecting the AST or checking it into version control.

        Args:
            document: Document text

        Returns:
            JSON string containing the YAML content
        """
        try:
            result = parse_document(document, max_depth=max_depth)
            if not result.success or result.ast is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": result.error.message if result.error else "Parse failed",
                    }
                )

            yaml_content = yaml.safe_dump(
                result.ast.to_yaml_dict(), default_flow_style=False, sort_keys=False
            )
            return json.dumps({"status": "success", "yaml": yaml_content})
        except Exception as e:
            logger.exception("Failed to export YAML")
            return json.dumps({"status": "error", "message": str(e)})

    tools["wheelgen_export_document_yaml"] = wheelgen_export_document_yaml

    return tools
