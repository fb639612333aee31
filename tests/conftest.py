"""
Shared pytest fixtures for the datagovmy-mcp test suite.

No test touches the network: every client is built on an httpx.MockTransport
backed by ``FakeUpstream``, a tiny router keyed on host + path.

Default routes registered by ``upstream``: none. Tests add what they need:

    upstream.add("api.data.gov.my", "/data-catalogue", json={...})
    upstream.add(RAW_HOST, "/…/x.json", exc=httpx.ConnectError("boom"))
"""

from __future__ import annotations

import asyncio
import base64
import importlib
import json

import httpx
import pytest

from datagovmy_mcp import settings
from datagovmy_mcp.clients import create_clients
from datagovmy_mcp.registry import ToolRegistry

OPEN_DATA_HOST = "api.data.gov.my"
GITHUB_HOST = "api.github.com"
RAW_HOST = "raw.githubusercontent.com"
LISTING_PATH = "/repos/data-gov-my/datagovmy-meta/contents/data-catalogue"
RAW_PREFIX = "/data-gov-my/datagovmy-meta/main/data-catalogue"


class FakeUpstream:
    """Callable MockTransport handler that records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, host: str, path: str, *, json=None, status: int = 200, text=None, exc=None, handler=None):
        # a fresh Response per request, so routes can be hit repeatedly
        if exc is not None:
            self.routes[(host, path)] = exc
        elif handler is not None:
            self.routes[(host, path)] = handler
        elif text is not None:
            self.routes[(host, path)] = lambda request: httpx.Response(status, text=text)
        else:
            self.routes[(host, path)] = lambda request: httpx.Response(status, json=json)

    def calls(self, host: str | None = None) -> list[httpx.Request]:
        return [r for r in self.requests if host is None or r.url.host == host]

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        route = self.routes.get((request.url.host, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        return route(request)


def run(coro):
    return asyncio.run(coro)


def listing_entry(name: str, type_: str = "file", size: int = 100) -> dict:
    return {
        "name": name,
        "path": f"data-catalogue/{name}",
        "type": type_,
        "size": size,
        "download_url": f"https://{RAW_HOST}{RAW_PREFIX}/{name}" if type_ == "file" else None,
    }


def github_file(payload: dict) -> dict:
    """A contents-API file object wrapping *payload* as GitHub does (base64, 60-col lines)."""
    encoded = base64.b64encode(json.dumps(payload).encode()).decode()
    wrapped = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60))
    return {"type": "file", "encoding": "base64", "content": wrapped + "\n"}


def envelope(result) -> dict:
    """Parse the single text block of a successful call."""
    assert len(result) == 1
    assert result[0].type == "text"
    return json.loads(result[0].text)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def clients(upstream: FakeUpstream):
    return create_clients(transport=httpx.MockTransport(upstream))


@pytest.fixture
def registry(clients) -> ToolRegistry:
    return ToolRegistry(clients)


@pytest.fixture
def reload_settings(monkeypatch):
    """Reload settings under test env vars, then restore the defaults."""
    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(settings)

    yield _reload
    monkeypatch.undo()
    importlib.reload(settings)
