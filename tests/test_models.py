"""Unit tests for datagovmy_mcp.models — argument validation and listing entries."""

from __future__ import annotations

import pytest

from datagovmy_mcp.models import (
    CatalogueArgs,
    CatalogueDataArgs,
    GitHubFileEntry,
    InvalidArguments,
    ListCataloguesArgs,
    NoArgs,
    SearchArgs,
)


class TestCatalogueArgs:
    def test_valid_id(self):
        assert CatalogueArgs.from_arguments({"id": "population_malaysia"}).id == "population_malaysia"

    def test_id_is_stripped(self):
        assert CatalogueArgs.from_arguments({"id": "  cpi_core \n"}).id == "cpi_core"

    @pytest.mark.parametrize("arguments", [None, {}, {"limit": 5}])
    def test_missing_id(self, arguments):
        with pytest.raises(InvalidArguments, match="Missing required parameter: id"):
            CatalogueArgs.from_arguments(arguments)

    @pytest.mark.parametrize("value", ["", "   ", 42, ["a"], {"x": 1}])
    def test_malformed_id(self, value):
        with pytest.raises(InvalidArguments, match="Invalid parameter: id"):
            CatalogueArgs.from_arguments({"id": value})

    def test_arguments_must_be_object(self):
        with pytest.raises(InvalidArguments, match="must be an object"):
            CatalogueArgs.from_arguments(["id"])


class TestLimit:
    def test_limit_absent(self):
        assert ListCataloguesArgs.from_arguments(None).limit is None

    def test_integral_float_accepted(self):
        assert CatalogueDataArgs.from_arguments({"id": "x", "limit": 10.0}).limit == 10

    @pytest.mark.parametrize("value", [0, -3, 2.5, "10", True])
    def test_bad_limit(self, value):
        with pytest.raises(InvalidArguments, match="limit"):
            CatalogueDataArgs.from_arguments({"id": "x", "limit": value})

    def test_params_omit_limit_when_absent(self):
        assert CatalogueDataArgs(id="x").params() == {"id": "x"}

    def test_params_forward_limit(self):
        assert CatalogueDataArgs(id="x", limit=3).params() == {"id": "x", "limit": 3}


class TestSearchArgs:
    def test_keyword_lowercased(self):
        assert SearchArgs.from_arguments({"keyword": " PoP "}).keyword == "pop"

    def test_missing_keyword(self):
        with pytest.raises(InvalidArguments, match="keyword"):
            SearchArgs.from_arguments({})


def test_no_args_ignores_extra_keys():
    assert NoArgs.from_arguments({"unexpected": 1}) == NoArgs()


class TestGitHubFileEntry:
    def test_json_file_is_catalogue(self):
        entry = GitHubFileEntry.from_json({"name": "cpi_core.json", "type": "file", "size": 12})
        assert entry.is_catalogue_file
        assert entry.catalogue_id == "cpi_core"

    def test_directory_is_not_catalogue(self):
        entry = GitHubFileEntry.from_json({"name": "archive.json", "type": "dir"})
        assert not entry.is_catalogue_file

    def test_other_suffix_is_not_catalogue(self):
        entry = GitHubFileEntry.from_json({"name": "README.txt", "type": "file"})
        assert not entry.is_catalogue_file

    def test_summary_shape(self):
        entry = GitHubFileEntry.from_json({
            "name": "cpi_core.json", "type": "file", "size": 12,
            "download_url": "https://example.test/cpi_core.json",
        })
        assert entry.summary().to_dict() == {
            "id": "cpi_core",
            "name": "cpi_core.json",
            "download_url": "https://example.test/cpi_core.json",
            "size": 12,
        }

    def test_missing_size_defaults_to_zero(self):
        assert GitHubFileEntry.from_json({"name": "a.json", "type": "file", "size": None}).size == 0


class TestListCataloguesArgs:
    def test_optional_id(self):
        args = ListCataloguesArgs.from_arguments({"id": " cpi_core ", "limit": 3})
        assert args.params() == {"id": "cpi_core", "limit": 3}

    def test_no_params_when_empty(self):
        assert ListCataloguesArgs.from_arguments({}).params() is None

    def test_blank_id_rejected(self):
        with pytest.raises(InvalidArguments, match="Invalid parameter: id"):
            ListCataloguesArgs.from_arguments({"id": "  "})
