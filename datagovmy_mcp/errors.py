"""Protocol error kinds surfaced to MCP clients.

Three kinds only: InvalidParams (bad arguments, raised before any network
call), MethodNotFound (unknown tool name) and InternalError (everything that
goes wrong after validation).
"""

from __future__ import annotations

import httpx
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def method_not_found(name: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))


def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))


def upstream_message(exc: httpx.HTTPError) -> str:
    """Best human-readable text for a failed upstream request.

    Prefers the ``message`` field of a JSON error body (both api.data.gov.my
    and GitHub send one), falling back to httpx's own description.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(exc) or type(exc).__name__
