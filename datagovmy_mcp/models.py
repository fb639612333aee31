"""Argument records and upstream shapes.

Each tool takes one argument record. ``from_arguments`` is the only place raw
MCP arguments are inspected: it returns a fully validated record or raises
``InvalidArguments`` naming the offending field.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

JSON_SUFFIX = ".json"


class InvalidArguments(ValueError):
    """Raw tool arguments did not match the tool's parameters."""


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------

def _required_str(args: dict, field: str) -> str:
    value = args.get(field)
    if value is None:
        raise InvalidArguments(f"Missing required parameter: {field}")
    if not isinstance(value, str) or not value.strip():
        raise InvalidArguments(f"Invalid parameter: {field} must be a non-empty string")
    return value.strip()


def _optional_str(args: dict, field: str) -> str | None:
    if args.get(field) is None:
        return None
    return _required_str(args, field)


def _optional_limit(args: dict, field: str = "limit") -> int | None:
    value = args.get(field)
    if value is None:
        return None
    # bool is an int subclass; "limit": true is not a limit
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArguments(f"Invalid parameter: {field} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidArguments(f"Invalid parameter: {field} must be an integer")
    if value < 1:
        raise InvalidArguments(f"Invalid parameter: {field} must be at least 1")
    return int(value)


def _as_dict(arguments: Any) -> dict:
    if arguments is None:
        return {}
    if not isinstance(arguments, dict):
        raise InvalidArguments("Invalid parameters: arguments must be an object")
    return arguments


# ---------------------------------------------------------------------------
# Argument records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NoArgs:
    @classmethod
    def from_arguments(cls, arguments: Any) -> NoArgs:
        _as_dict(arguments)
        return cls()


@dataclass(frozen=True)
class ListCataloguesArgs:
    id: str | None = None
    limit: int | None = None

    @classmethod
    def from_arguments(cls, arguments: Any) -> ListCataloguesArgs:
        args = _as_dict(arguments)
        return cls(id=_optional_str(args, "id"), limit=_optional_limit(args))

    def params(self) -> dict | None:
        """Query string for /data-catalogue; only the fields given."""
        params = {}
        if self.id is not None:
            params["id"] = self.id
        if self.limit is not None:
            params["limit"] = self.limit
        return params or None


@dataclass(frozen=True)
class CatalogueArgs:
    id: str

    @classmethod
    def from_arguments(cls, arguments: Any) -> CatalogueArgs:
        args = _as_dict(arguments)
        return cls(id=_required_str(args, "id"))


@dataclass(frozen=True)
class CatalogueDataArgs:
    id: str
    limit: int | None = None

    @classmethod
    def from_arguments(cls, arguments: Any) -> CatalogueDataArgs:
        args = _as_dict(arguments)
        return cls(id=_required_str(args, "id"), limit=_optional_limit(args))

    def params(self) -> dict:
        """Query string for /data-catalogue; limit only when given."""
        params: dict = {"id": self.id}
        if self.limit is not None:
            params["limit"] = self.limit
        return params


@dataclass(frozen=True)
class SearchArgs:
    keyword: str

    @classmethod
    def from_arguments(cls, arguments: Any) -> SearchArgs:
        args = _as_dict(arguments)
        return cls(keyword=_required_str(args, "keyword").lower())


# ---------------------------------------------------------------------------
# Metadata repository shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GitHubFileEntry:
    """One item of a GitHub contents directory listing."""
    name: str
    type: str
    size: int = 0
    download_url: str | None = None
    path: str = ""

    @classmethod
    def from_json(cls, item: dict) -> GitHubFileEntry:
        return cls(
            name=str(item.get("name", "")),
            type=str(item.get("type", "")),
            size=int(item.get("size") or 0),
            download_url=item.get("download_url"),
            path=str(item.get("path", "")),
        )

    @property
    def is_catalogue_file(self) -> bool:
        return self.type == "file" and self.name.endswith(JSON_SUFFIX)

    @property
    def catalogue_id(self) -> str:
        return self.name[: -len(JSON_SUFFIX)] if self.name.endswith(JSON_SUFFIX) else self.name

    def summary(self) -> CatalogueSummary:
        return CatalogueSummary(
            id=self.catalogue_id,
            name=self.name,
            download_url=self.download_url,
            size=self.size,
        )


@dataclass(frozen=True)
class CatalogueSummary:
    id: str
    name: str
    download_url: str | None
    size: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SearchMatch:
    id: str
    title: str
    description: str
    match_reason: str   # "title" | "description" | "id"

    def to_dict(self) -> dict:
        return asdict(self)
