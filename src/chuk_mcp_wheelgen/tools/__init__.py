"""
MCP tools for the pattern language.

Tools are organized by domain:
- patterns: parse, expand, compile pattern expressions; command help
- documents: parse artwork documents and export them as YAML
"""

from chuk_mcp_wheelgen.tools.documents import register_document_tools
from chuk_mcp_wheelgen.tools.patterns import register_pattern_tools

__all__ = [
    "register_document_tools",
    "register_pattern_tools",
]
