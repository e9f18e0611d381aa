"""
Pytest configuration and shared fixtures.
"""

import pytest

SAMPLE_DOCUMENT = """\
;; Sample artwork
variables:
@petal = $dh2
@stem = seq(@petal, 2)

rings:
O(9, 128): seq($dh2v, 3)
O(12, 12): @stem [A, B]
;; spacer ring
O(15.5, 7): space($dhl, 2)

palette:
A = triadic(baseHue: 180, saturation: 85)
B = rgb(255, 128, 64)
C = hsb(180, 85, 90)
D = A

dot:
size: 4.5
color: #ffcc00
visible: true

guides:
anything goes here
"""


@pytest.fixture
def sample_document() -> str:
    """A document exercising every section."""
    return SAMPLE_DOCUMENT


class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def mock_mcp() -> MockMCPServer:
    """A fresh mock MCP server."""
    return MockMCPServer("test")
