"""data.gov.my catalogue MCP server - open-data catalogue tools over stdio."""

from datagovmy_mcp.clients import UpstreamClients, create_clients
from datagovmy_mcp.registry import TOOLS, ToolDescriptor, ToolRegistry

__all__ = [
    "TOOLS",
    "ToolDescriptor",
    "ToolRegistry",
    "UpstreamClients",
    "create_clients",
]
