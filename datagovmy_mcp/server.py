"""
data.gov.my Catalogue MCP Server

Exposes the open-data catalogue of https://data.gov.my to MCP clients
(e.g. Claude Desktop) over stdio:

  get_catalogues(limit?)              → every catalogue
  get_catalogue(id)                   → one catalogue
  get_catalogue_data(id, limit?)      → records of one catalogue
  list_catalogue_ids()                → ids from the metadata repository
  get_catalogue_metadata(id)          → decoded metadata file
  search_catalogues(keyword)          → title/description/id matches

Run with:
    python -m datagovmy_mcp
"""

from __future__ import annotations

import logging

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from datagovmy_mcp import settings
from datagovmy_mcp.clients import UpstreamClients, create_clients
from datagovmy_mcp.registry import ToolRegistry

logger = logging.getLogger(__name__)


def create_server(registry: ToolRegistry) -> Server:
    """Low-level MCP server whose two request handlers delegate to *registry*."""
    server = Server(settings.SERVER_NAME, version=settings.SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return registry.list_tools()

    # Raw handler: McpError must reach the client as a JSON-RPC error with its
    # code. Arguments are validated by the registry only.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        content = await registry.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(types.CallToolResult(content=content))

    server.request_handlers[types.CallToolRequest] = call_tool

    return server


async def serve(clients: UpstreamClients | None = None) -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    clients = clients or create_clients()
    server = create_server(ToolRegistry(clients))
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("data.gov.my catalogue MCP server running on stdio")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await clients.aclose()
