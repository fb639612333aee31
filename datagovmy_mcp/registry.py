"""Tool registry and dispatcher.

The registry holds one ``ToolDescriptor`` per tool, keyed by name. Listing is
pure data; ``call_tool`` is a single dict lookup followed by argument
validation, the handler call and envelope wrapping. All failures leave as
``McpError`` with one of three codes (see ``errors``).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
from mcp import types
from mcp.shared.exceptions import McpError

from datagovmy_mcp import handlers
from datagovmy_mcp.clients import UpstreamClients
from datagovmy_mcp.errors import internal_error, invalid_params, method_not_found, upstream_message
from datagovmy_mcp.models import (
    CatalogueArgs,
    CatalogueDataArgs,
    InvalidArguments,
    ListCataloguesArgs,
    NoArgs,
    SearchArgs,
)

logger = logging.getLogger(__name__)

Handler = Callable[[UpstreamClients, Any], Awaitable[dict]]


@dataclass(frozen=True)
class ParameterSpec:
    type: str
    description: str
    required: bool = False
    minimum: int | None = None


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    arguments: type
    handler: Handler
    parameters: dict[str, ParameterSpec] = field(default_factory=dict)

    def input_schema(self) -> dict:
        properties = {}
        for pname, spec in self.parameters.items():
            prop: dict = {"type": spec.type, "description": spec.description}
            if spec.minimum is not None:
                prop["minimum"] = spec.minimum
            properties[pname] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [pname for pname, spec in self.parameters.items() if spec.required],
        }

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

_ID = ParameterSpec("string", "ID of the dataset (e.g. 'population_malaysia')", required=True)
_LIMIT = ParameterSpec("integer", "Maximum number of records to return", minimum=1)

TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="get_catalogues",
        description="Fetch list of all data catalogues.",
        arguments=ListCataloguesArgs,
        handler=handlers.get_catalogues,
        parameters={
            "id": ParameterSpec("string", "Optional dataset ID to narrow the listing"),
            "limit": _LIMIT,
        },
    ),
    ToolDescriptor(
        name="get_catalogue",
        description="Fetch a specific data catalogue by id.",
        arguments=CatalogueArgs,
        handler=handlers.get_catalogue,
        parameters={"id": _ID},
    ),
    ToolDescriptor(
        name="get_catalogue_data",
        description="Fetch the records of a data catalogue, optionally limited to the first N rows.",
        arguments=CatalogueDataArgs,
        handler=handlers.get_catalogue_data,
        parameters={"id": _ID, "limit": _LIMIT},
    ),
    ToolDescriptor(
        name="list_catalogue_ids",
        description="List the ids of all catalogues published in the data.gov.my metadata repository.",
        arguments=NoArgs,
        handler=handlers.list_catalogue_ids,
    ),
    ToolDescriptor(
        name="get_catalogue_metadata",
        description="Fetch the descriptive metadata (title, description, fields, sources) of a catalogue.",
        arguments=CatalogueArgs,
        handler=handlers.get_catalogue_metadata,
        parameters={"id": _ID},
    ),
    ToolDescriptor(
        name="search_catalogues",
        description=(
            "Search catalogue titles, descriptions and ids for a keyword "
            "(case-insensitive, first 20 catalogues only)."
        ),
        arguments=SearchArgs,
        handler=handlers.search_catalogues,
        parameters={"keyword": ParameterSpec("string", "Keyword to search for", required=True)},
    ),
)


class ToolRegistry:
    """Static tool catalogue bound to a set of upstream clients."""

    def __init__(self, clients: UpstreamClients, tools: tuple[ToolDescriptor, ...] = TOOLS):
        self.clients = clients
        self._tools = {tool.name: tool for tool in tools}

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def descriptor(self, name: str) -> ToolDescriptor:
        try:
            return self._tools[name]
        except KeyError:
            raise method_not_found(name) from None

    def list_tools(self) -> list[types.Tool]:
        return [tool.to_tool() for tool in self._tools.values()]

    async def call_tool(self, name: str, arguments: dict | None) -> list[types.TextContent]:
        """Validate, dispatch and wrap one tool call.

        Raises:
            McpError: METHOD_NOT_FOUND, INVALID_PARAMS or INTERNAL_ERROR.
        """
        try:
            tool = self.descriptor(name)
            try:
                args = tool.arguments.from_arguments(arguments)
            except InvalidArguments as exc:
                raise invalid_params(str(exc)) from exc

            try:
                payload = await tool.handler(self.clients, args)
            except httpx.HTTPError as exc:
                raise internal_error(f"API request failed: {upstream_message(exc)}") from exc
            except McpError:
                raise
            except Exception as exc:
                raise internal_error(f"Failed to process request: {exc}") from exc
        except McpError as err:
            logger.error("[Error] %s: %s", name, err.error.message)
            raise

        return [types.TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))]
