"""
Tests for MCP tools.

Tests the MCP tool implementations for patterns and documents.
"""

import json

import pytest
import yaml

from chuk_mcp_wheelgen.tools import register_document_tools, register_pattern_tools


class TestPatternTools:
    """Tests for pattern tools."""

    def test_registration(self, mock_mcp):
        """All pattern tools are registered on the server."""
        tools = register_pattern_tools(mock_mcp)
        assert set(tools) == {
            "wheelgen_parse_pattern",
            "wheelgen_compile_pattern",
            "wheelgen_list_commands",
            "wheelgen_check_syntax",
        }
        assert set(mock_mcp.tools) == set(tools)

    @pytest.mark.asyncio
    async def test_parse_pattern(self, mock_mcp):
        """Parse pattern tool."""
        tools = register_pattern_tools(mock_mcp)

        result = await tools["wheelgen_parse_pattern"](pattern="seq($dh2v, 3)")
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["ast"]["type"] == "command"
        assert data["count"] == 12
        assert data["flat"] == "dh2vdh2vdh2v"
        assert data["expanded"][0] == {"char": "d", "rotated": False}

    @pytest.mark.asyncio
    async def test_parse_pattern_error(self, mock_mcp):
        """Parse errors are reported with their location."""
        tools = register_pattern_tools(mock_mcp)

        result = await tools["wheelgen_parse_pattern"](pattern="seq($d, ])")
        data = json.loads(result)
        assert data["status"] == "error"
        assert data["message"] == "Unexpected token in argument: ]"
        assert data["error"]["column"] == 9

    @pytest.mark.asyncio
    async def test_parse_pattern_max_depth(self, mock_mcp):
        """The configured nesting limit applies to tool calls."""
        tools = register_pattern_tools(mock_mcp, max_depth=1)

        data = json.loads(await tools["wheelgen_parse_pattern"](pattern="mir(mir($d))"))
        assert data["status"] == "error"
        assert data["message"] == "Maximum nesting depth of 1 exceeded"

        data = json.loads(await tools["wheelgen_parse_pattern"](pattern="mir(dh)"))
        assert data["status"] == "success"

    @pytest.mark.asyncio
    async def test_compile_pattern(self, mock_mcp):
        """Compile pattern tool."""
        tools = register_pattern_tools(mock_mcp)

        result = await tools["wheelgen_compile_pattern"](pattern="space($dhl, 2)")
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["flat"] == "dx2hx2l"

    @pytest.mark.asyncio
    async def test_compile_pattern_error(self, mock_mcp):
        """Expansion errors surface as tool errors."""
        tools = register_pattern_tools(mock_mcp)

        result = await tools["wheelgen_compile_pattern"](pattern="seq($d)")
        data = json.loads(result)
        assert data["status"] == "error"
        assert "at least 2 arguments" in data["message"]

    @pytest.mark.asyncio
    async def test_list_commands(self, mock_mcp):
        """List commands tool."""
        tools = register_pattern_tools(mock_mcp)

        result = await tools["wheelgen_list_commands"]()
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["count"] == 3
        assert [c["name"] for c in data["commands"]] == ["seq", "mir", "space"]

    @pytest.mark.asyncio
    async def test_check_syntax(self, mock_mcp):
        """Check syntax tool."""
        tools = register_pattern_tools(mock_mcp)

        data = json.loads(await tools["wheelgen_check_syntax"](text="mir($dh)"))
        assert data["syntax"] == "pattern"
        assert data["pattern_language"] is True

        data = json.loads(await tools["wheelgen_check_syntax"](text="dh2v"))
        assert data["syntax"] == "flat"


class TestDocumentTools:
    """Tests for document tools."""

    @pytest.mark.asyncio
    async def test_parse_document(self, mock_mcp, sample_document):
        """Parse document tool fits each ring."""
        tools = register_document_tools(mock_mcp)

        result = await tools["wheelgen_parse_document"](document=sample_document)
        data = json.loads(result)
        assert data["status"] == "success"
        assert len(data["document"]["rings"]) == 3

        rings = data["rings"]
        assert len(rings[0]["elements"]) == 128
        assert rings[1]["flat"] == "dh2dh2dh2dh2"
        assert rings[1]["colors"] == ["A", "B"]
        assert rings[2]["elements"] == ["d", "x", "x", "h", "x", "x", "l"]

    @pytest.mark.asyncio
    async def test_parse_document_ring_error(self, mock_mcp):
        """A ring that cannot expand reports its own error."""
        tools = register_document_tools(mock_mcp)

        result = await tools["wheelgen_parse_document"](document="rings:\nO(1, 4): mir($d, $h)")
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["rings"][0]["error"] == "mir command requires exactly 1 argument"
        assert "flat" not in data["rings"][0]

    @pytest.mark.asyncio
    async def test_parse_document_error(self, mock_mcp):
        """Document errors carry the line."""
        tools = register_document_tools(mock_mcp)

        result = await tools["wheelgen_parse_document"](document="rings:\nO(9,128) d")
        data = json.loads(result)
        assert data["status"] == "error"
        assert data["error"]["line"] == 2

    @pytest.mark.asyncio
    async def test_parse_document_max_depth(self, mock_mcp):
        """Nesting built through variables is limited too."""
        tools = register_document_tools(mock_mcp, max_depth=2)

        document = "variables:\n@a = mir($d)\n@b = mir(@a)\n\nrings:\nO(1, 1): mir(@b)"
        data = json.loads(await tools["wheelgen_parse_document"](document=document))
        assert data["status"] == "error"
        assert data["message"] == "Maximum nesting depth of 2 exceeded"
        assert data["error"]["line"] == 6

    @pytest.mark.asyncio
    async def test_export_yaml(self, mock_mcp, sample_document):
        """Export document as YAML."""
        tools = register_document_tools(mock_mcp)

        result = await tools["wheelgen_export_document_yaml"](document=sample_document)
        data = json.loads(result)
        assert data["status"] == "success"

        exported = yaml.safe_load(data["yaml"])
        assert exported["rings"][2]["radius"] == 15.5
        assert exported["palette"]["D"] == {"type": "color_reference", "name": "A"}
        assert exported["dot"]["color"] == "#ffcc00"
        assert "colors" not in exported["rings"][0]

    @pytest.mark.asyncio
    async def test_export_yaml_error(self, mock_mcp):
        """Export reports parse errors."""
        tools = register_document_tools(mock_mcp)

        result = await tools["wheelgen_export_document_yaml"](document="variables:\nbad")
        data = json.loads(result)
        assert data["status"] == "error"
        assert data["message"].startswith("Invalid variable definition")
