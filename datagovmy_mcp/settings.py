"""
All tuneable constants for datagovmy-mcp.
Override any value via the corresponding environment variable.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Server identity
# ---------------------------------------------------------------------------

SERVER_NAME    = "datagovmy-mcp"
SERVER_VERSION = "0.2.0"

# ---------------------------------------------------------------------------
# Upstream APIs
# ---------------------------------------------------------------------------

DATAGOVMY_API_URL = os.environ.get("DATAGOVMY_API_URL", "https://api.data.gov.my")
GITHUB_API_URL    = os.environ.get("GITHUB_API_URL", "https://api.github.com")

# Metadata repository: one <catalogue-id>.json file per catalogue under METADATA_PATH
METADATA_REPO = os.environ.get("METADATA_REPO", "data-gov-my/datagovmy-meta")
METADATA_PATH = os.environ.get("METADATA_PATH", "data-catalogue").strip("/")

# Only raises the GitHub rate limit; every tool works without it.
GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN") or None

REQUEST_TIMEOUT = 10.0   # seconds, per outbound request

# ---------------------------------------------------------------------------
# search_catalogues
# ---------------------------------------------------------------------------

SEARCH_CANDIDATE_LIMIT = 20   # raw fetches per search
SEARCH_CONCURRENCY     = 20   # simultaneous raw fetches

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def metadata_contents_path(filename: str = "") -> str:
    """GitHub contents API path for METADATA_PATH, or a file inside it."""
    path = f"/repos/{METADATA_REPO}/contents/{METADATA_PATH}"
    return f"{path}/{filename}" if filename else path
