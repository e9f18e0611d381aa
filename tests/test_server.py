"""
Tests for the server command line.
"""

import pytest

from chuk_mcp_wheelgen import async_server, server
from chuk_mcp_wheelgen.constants import DEFAULT_MAX_DEPTH


class TestArguments:
    """Tests for option parsing."""

    def test_defaults(self) -> None:
        """stdio transport with the default nesting limit."""
        args = server.build_arg_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.max_depth == DEFAULT_MAX_DEPTH == 64
        assert args.debug is False

    def test_max_depth(self) -> None:
        """--max-depth takes a positive integer."""
        args = server.build_arg_parser().parse_args(["--max-depth", "8"])
        assert args.max_depth == 8

    @pytest.mark.parametrize("value", ["0", "-3", "abc"])
    def test_invalid_max_depth(self, value: str) -> None:
        """Non-positive or non-numeric limits are rejected."""
        with pytest.raises(SystemExit):
            server.build_arg_parser().parse_args(["--max-depth", value])

    def test_unknown_transport(self) -> None:
        """Only stdio and http are served."""
        with pytest.raises(SystemExit):
            server.build_arg_parser().parse_args(["--transport", "sse"])


class FakeServer:
    """Records which transport was started."""

    def __init__(self):
        self.started = None

    async def run_stdio(self):
        self.started = "stdio"

    async def run_http(self, port):
        self.started = f"http:{port}"


class TestMain:
    """Tests for main() wiring."""

    @pytest.fixture
    def created(self, monkeypatch):
        calls = {}

        def fake_create_server(max_depth):
            calls["max_depth"] = max_depth
            calls["server"] = FakeServer()
            return calls["server"]

        monkeypatch.setattr(async_server, "create_server", fake_create_server)
        return calls

    def test_stdio(self, created) -> None:
        """The limit reaches the server factory."""
        server.main(["--max-depth", "12"])
        assert created["max_depth"] == 12
        assert created["server"].started == "stdio"

    def test_http(self, created) -> None:
        """http runs on the requested port."""
        server.main(["--transport", "http", "--port", "9001"])
        assert created["max_depth"] == DEFAULT_MAX_DEPTH
        assert created["server"].started == "http:9001"
