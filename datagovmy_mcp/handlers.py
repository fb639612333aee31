"""
Tool handlers for the data.gov.my catalogue server.

Each handler takes the shared upstream clients and a validated argument record,
performs its GET(s) and returns the payload dict that the registry wraps into
the response envelope. Handlers raise; the registry maps exceptions to
protocol errors. The one exception is search_catalogues, which swallows
per-candidate failures so a single broken file cannot abort a search.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from urllib.parse import quote

from datagovmy_mcp import settings
from datagovmy_mcp.clients import UpstreamClients
from datagovmy_mcp.models import (
    JSON_SUFFIX,
    CatalogueArgs,
    CatalogueDataArgs,
    GitHubFileEntry,
    ListCataloguesArgs,
    NoArgs,
    SearchArgs,
    SearchMatch,
)

logger = logging.getLogger(__name__)

CATALOGUE_ENDPOINT = "/data-catalogue"


# ---------------------------------------------------------------------------
# Open-data API
# ---------------------------------------------------------------------------

async def get_catalogues(clients: UpstreamClients, args: ListCataloguesArgs) -> dict:
    logger.info("[API] Fetching data catalogues (id=%s, limit=%s)", args.id, args.limit)
    response = await clients.open_data.get(CATALOGUE_ENDPOINT, params=args.params())
    response.raise_for_status()
    return {
        "catalogues": response.json(),
        "message": "Catalogues fetched successfully.",
    }


async def get_catalogue(clients: UpstreamClients, args: CatalogueArgs) -> dict:
    logger.info("[API] Fetching catalogue with id: %s", args.id)
    response = await clients.open_data.get(CATALOGUE_ENDPOINT, params={"id": args.id})
    response.raise_for_status()
    return {
        "catalogue": response.json(),
        "message": "Catalogue fetched successfully.",
    }


async def get_catalogue_data(clients: UpstreamClients, args: CatalogueDataArgs) -> dict:
    logger.info("[API] Fetching data for catalogue %s (limit=%s)", args.id, args.limit)
    response = await clients.open_data.get(CATALOGUE_ENDPOINT, params=args.params())
    response.raise_for_status()
    return {
        "id": args.id,
        "data": response.json(),
        "message": f"Data for catalogue '{args.id}' fetched successfully.",
    }


# ---------------------------------------------------------------------------
# Metadata repository (GitHub contents API)
# ---------------------------------------------------------------------------

async def _list_catalogue_files(clients: UpstreamClients) -> list[GitHubFileEntry]:
    """Directory listing filtered to ``*.json`` files, in listing order."""
    response = await clients.github.get(settings.metadata_contents_path())
    response.raise_for_status()
    listing = response.json()
    if not isinstance(listing, list):
        raise ValueError(f"expected a directory listing at {settings.METADATA_PATH!r}")
    entries = [GitHubFileEntry.from_json(item) for item in listing if isinstance(item, dict)]
    return [entry for entry in entries if entry.is_catalogue_file]


async def list_catalogue_ids(clients: UpstreamClients, args: NoArgs) -> dict:
    logger.info("[GitHub] Listing catalogue metadata files in %s", settings.METADATA_REPO)
    summaries = [entry.summary().to_dict() for entry in await _list_catalogue_files(clients)]
    return {
        "catalogues": summaries,
        "count": len(summaries),
        "message": f"Found {len(summaries)} catalogues.",
    }


def _decode_content(file_json: dict) -> str | None:
    """Decode the base64 ``content`` of a contents-API file object.

    Returns None when GitHub left the content out (files over 1 MB).
    """
    content = file_json.get("content")
    if not content or file_json.get("encoding", "base64") != "base64":
        return None
    # GitHub wraps the base64 text at 60 columns
    return base64.b64decode(content).decode("utf-8")


async def get_catalogue_metadata(clients: UpstreamClients, args: CatalogueArgs) -> dict:
    filename = quote(args.id + JSON_SUFFIX, safe="")
    logger.info("[GitHub] Fetching metadata for catalogue %s", args.id)
    response = await clients.github.get(settings.metadata_contents_path(filename))
    response.raise_for_status()
    file_json = response.json()
    if not isinstance(file_json, dict):
        raise ValueError(f"'{args.id}' is not a metadata file")

    text = _decode_content(file_json)
    if text is None:
        download_url = file_json.get("download_url")
        if not download_url:
            raise ValueError(f"metadata for '{args.id}' has no content")
        raw = await clients.raw.get(download_url)
        raw.raise_for_status()
        text = raw.text

    return {
        "id": args.id,
        "metadata": json.loads(text),
        "message": f"Metadata for catalogue '{args.id}' fetched successfully.",
    }


# ---------------------------------------------------------------------------
# search_catalogues
# ---------------------------------------------------------------------------

def _text_field(metadata: dict, field: str) -> str:
    """First non-empty ``field``, ``field_en`` or ``field_ms`` value as text.

    Per-language dicts like ``{"en": ..., "ms": ...}`` are joined with spaces.
    """
    for key in (field, f"{field}_en", f"{field}_ms"):
        value = metadata.get(key)
        if isinstance(value, dict):
            value = " ".join(v for v in value.values() if isinstance(v, str))
        if isinstance(value, str) and value:
            return value
    return ""


def match_reason(keyword: str, catalogue_id: str, title: str, description: str) -> str | None:
    """Which field contains *keyword* (already lower-cased), title first."""
    if keyword in title.lower():
        return "title"
    if keyword in description.lower():
        return "description"
    if keyword in catalogue_id.lower():
        return "id"
    return None


async def _fetch_candidate(
    clients: UpstreamClients,
    entry: GitHubFileEntry,
    semaphore: asyncio.Semaphore,
) -> dict | None:
    if not entry.download_url:
        logger.warning("[Search] Skipping %s: no download_url", entry.name)
        return None
    async with semaphore:
        try:
            response = await clients.raw.get(entry.download_url)
            response.raise_for_status()
            metadata = response.json()
        except Exception as exc:  # noqa: BLE001
            logger.warning("[Search] Failed to fetch %s: %s", entry.name, exc)
            return None
    return metadata if isinstance(metadata, dict) else {}


async def search_catalogues(clients: UpstreamClients, args: SearchArgs) -> dict:
    entries = await _list_catalogue_files(clients)
    candidates = entries[: settings.SEARCH_CANDIDATE_LIMIT]
    logger.info(
        "[Search] Searching %d of %d catalogues for %r",
        len(candidates), len(entries), args.keyword,
    )

    semaphore = asyncio.Semaphore(min(settings.SEARCH_CONCURRENCY, settings.SEARCH_CANDIDATE_LIMIT))
    # gather keeps candidate order, so results do not depend on completion order
    fetched = await asyncio.gather(
        *(_fetch_candidate(clients, entry, semaphore) for entry in candidates)
    )

    matches: list[SearchMatch] = []
    for entry, metadata in zip(candidates, fetched):
        if metadata is None:
            continue
        title = _text_field(metadata, "title")
        description = _text_field(metadata, "description")
        reason = match_reason(args.keyword, entry.catalogue_id, title, description)
        if reason:
            matches.append(SearchMatch(
                id=entry.catalogue_id,
                title=title,
                description=description,
                match_reason=reason,
            ))

    return {
        "keyword": args.keyword,
        "matches": [m.to_dict() for m in matches],
        "count": len(matches),
        "searched": len(candidates),
        "message": f"Found {len(matches)} catalogues matching '{args.keyword}'.",
    }
