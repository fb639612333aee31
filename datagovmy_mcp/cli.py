"""CLI entry point for the data.gov.my catalogue MCP server.

Usage:
    datagovmy-mcp serve [--log-level DEBUG]
    datagovmy-mcp tools
    datagovmy-mcp config [--name datagovmy]
"""

import argparse
import asyncio
import json
import logging
import sys

from datagovmy_mcp import settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Log to stderr; stdout carries the MCP stdio stream."""
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the stdio MCP server until EOF or Ctrl-C."""
    from datagovmy_mcp.server import serve

    logger.info("[Setup] Initializing data.gov.my catalogue MCP server...")
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    sys.exit(0)


def cmd_tools(args: argparse.Namespace) -> None:
    """Print the tool catalogue as JSON."""
    from datagovmy_mcp.registry import TOOLS

    catalogue = [tool.to_tool().model_dump(exclude_none=True) for tool in TOOLS]
    print(json.dumps(catalogue, indent=2))


def client_config(name: str, env: dict | None = None) -> dict:
    """``mcpServers`` entry that launches this server over stdio."""
    server: dict = {
        "command": sys.executable,
        "args": ["-m", "datagovmy_mcp"],
    }
    if env:
        server["env"] = env
    return {"mcpServers": {name: server}}


def cmd_config(args: argparse.Namespace) -> None:
    """Print an MCP client config snippet for this server."""
    env = {"GITHUB_TOKEN": settings.GITHUB_TOKEN} if args.with_token and settings.GITHUB_TOKEN else None
    print(json.dumps(client_config(args.name, env), indent=2))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="datagovmy-mcp",
        description="MCP server for the data.gov.my open-data catalogue",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Log level for stderr diagnostics (default: {settings.LOG_LEVEL})",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_serve = subparsers.add_parser("serve", help="Run the MCP server on stdio (default)")
    p_serve.set_defaults(func=cmd_serve)

    p_tools = subparsers.add_parser("tools", help="Print the tool catalogue as JSON")
    p_tools.set_defaults(func=cmd_tools)

    p_config = subparsers.add_parser("config", help="Print an MCP client config snippet")
    p_config.add_argument("--name", default="datagovmy", help="Server key in mcpServers (default: datagovmy)")
    p_config.add_argument(
        "--with-token", action="store_true",
        help="Include GITHUB_TOKEN from the environment in the snippet",
    )
    p_config.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func = getattr(args, "func", cmd_serve)
    func(args)


if __name__ == "__main__":
    main()
