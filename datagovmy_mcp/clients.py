"""Long-lived HTTP clients for the upstream APIs.

One ``httpx.AsyncClient`` per upstream, created once at startup and shared by
every tool call. Tests pass ``transport=httpx.MockTransport(...)`` to keep all
traffic in-process.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from datagovmy_mcp import settings


@dataclass
class UpstreamClients:
    """The three HTTP clients a registry needs."""
    open_data: httpx.AsyncClient   # api.data.gov.my
    github: httpx.AsyncClient      # GitHub contents API
    raw: httpx.AsyncClient         # download_url fetches, no base URL

    async def aclose(self) -> None:
        for client in (self.open_data, self.github, self.raw):
            await client.aclose()


def _github_headers() -> dict:
    headers = {"Accept": "application/vnd.github.v3+json"}
    if settings.GITHUB_TOKEN:
        headers["Authorization"] = f"Bearer {settings.GITHUB_TOKEN}"
    return headers


def create_clients(transport: httpx.AsyncBaseTransport | None = None) -> UpstreamClients:
    """Build the upstream clients from settings.

    Args:
        transport: Optional transport shared by all three clients (tests only).
    """
    timeout = httpx.Timeout(settings.REQUEST_TIMEOUT)
    return UpstreamClients(
        open_data=httpx.AsyncClient(
            base_url=settings.DATAGOVMY_API_URL,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        ),
        github=httpx.AsyncClient(
            base_url=settings.GITHUB_API_URL,
            headers=_github_headers(),
            timeout=timeout,
            transport=transport,
        ),
        raw=httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport),
    )
