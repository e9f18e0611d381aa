#!/usr/bin/env python3
"""
Entry point for the CHUK Wheelgen MCP Server.

Serves the pattern and document tools over stdio (the default, for MCP
clients that spawn the process) or http. ``--max-depth`` bounds how deeply
patterns may nest, including nesting built up through document variables.
"""

import argparse
import asyncio
import logging

from chuk_mcp_wheelgen.constants import DEFAULT_MAX_DEPTH

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    """Command-line options for the server."""
    parser = argparse.ArgumentParser(description="CHUK Wheelgen MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum pattern nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (shows skipped characters and ignored lines)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse options, build the server and run the chosen transport."""
    args = build_arg_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Tool registration logs; import once logging is configured
    from chuk_mcp_wheelgen.async_server import create_server

    mcp = create_server(max_depth=args.max_depth)

    if args.transport == "stdio":
        logger.info("Starting CHUK Wheelgen MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Wheelgen MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
