#!/usr/bin/env python3
"""
Async Wheelgen MCP Server using chuk-mcp-server

This server exposes the wheelgen pattern language as MCP tools. Pattern
expressions like 'seq($dh2v, 3)' and whole artwork documents are compiled
into ordered symbol lists that a renderer draws around concentric rings.

The server provides tools for:
- Parsing and expanding pattern expressions
- Compiling patterns down to flat legacy notation
- Listing pattern commands
- Parsing artwork documents and exporting them as YAML
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_wheelgen.constants import DEFAULT_MAX_DEPTH
from chuk_mcp_wheelgen.tools import register_document_tools, register_pattern_tools

logger = logging.getLogger(__name__)


def create_server(max_depth: int = DEFAULT_MAX_DEPTH) -> ChukMCPServer:
    """
    Create the MCP server with every tool registered.

    Args:
        max_depth: Nesting limit applied to every pattern and document
            the tools parse or expand

    Returns:
        Configured server, ready for run_stdio() or run_http()
    """
    mcp = ChukMCPServer("chuk-mcp-wheelgen")

    pattern_tools = register_pattern_tools(mcp, max_depth)
    document_tools = register_document_tools(mcp, max_depth)

    logger.info("CHUK Wheelgen MCP Server initialized")
    logger.info(f"  Pattern tools: {len(pattern_tools)}")
    logger.info(f"  Document tools: {len(document_tools)}")
    logger.info(f"  Max nesting depth: {max_depth}")
    return mcp
