"""Tests for catalog loading."""
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from portfolio.catalog import PublicationCatalog, parse_catalog
from portfolio.exceptions import CatalogLoadError


class TestFileCatalog:
    def test_loads_records_in_order(self, catalog_file):
        """Records come back in catalog order with camelCase keys mapped."""
        catalog = PublicationCatalog(str(catalog_file))
        records = catalog.load()

        assert [p.id for p in records] == ["j1", "b1", "c1"]
        assert records[0].download_requestable is True
        assert records[0].preview_file == "j1.pdf"
        assert records[1].book == "Handbook of Commons"
        assert records[1].journal is None

    def test_fetches_only_once(self, catalog_file):
        """A second load returns the cached records without reading again."""
        catalog = PublicationCatalog(str(catalog_file))
        first = catalog.load()
        catalog_file.unlink()

        assert catalog.load() is first

    def test_missing_file_leaves_catalog_empty(self, tmp_path):
        catalog = PublicationCatalog(str(tmp_path / "missing.json"))

        with pytest.raises(CatalogLoadError):
            catalog.load()
        assert catalog.publications == []
        assert catalog.error is not None

    def test_failure_is_terminal(self, tmp_path, catalog_payload):
        """After a failure, later loads re-raise without fetching again."""
        path = tmp_path / "late.json"
        catalog = PublicationCatalog(str(path))
        with pytest.raises(CatalogLoadError) as first:
            catalog.load()

        path.write_text(json.dumps(catalog_payload), encoding="utf-8")
        with pytest.raises(CatalogLoadError) as second:
            catalog.load()
        assert second.value is first.value
        assert catalog.publications == []

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogLoadError) as exc:
            PublicationCatalog(str(path)).load()
        assert "invalid JSON" in exc.value.reason

    def test_record_without_id_fails_whole_catalog(self, tmp_path, catalog_payload):
        """No partial population when one record is malformed."""
        del catalog_payload["publications"][2]["id"]
        path = tmp_path / "partial.json"
        path.write_text(json.dumps(catalog_payload), encoding="utf-8")

        catalog = PublicationCatalog(str(path))
        with pytest.raises(CatalogLoadError):
            catalog.load()
        assert catalog.publications == []


class TestParseCatalog:
    def test_missing_publications_field(self):
        with pytest.raises(CatalogLoadError):
            parse_catalog({"items": []})

    def test_publications_not_a_list(self):
        with pytest.raises(CatalogLoadError):
            parse_catalog({"publications": {"id": "x"}})

    def test_single_string_author(self):
        records = parse_catalog({"publications": [{"id": "x", "authors": "Solo Author"}]})
        assert records[0].authors == ["Solo Author"]

    def test_single_string_keyword(self):
        records = parse_catalog({"publications": [{"id": "x", "keywords": "soil"}]})
        assert records[0].keywords == ["soil"]

    def test_year_as_text_is_converted(self):
        records = parse_catalog({"publications": [{"id": "x", "year": "2019"}]})
        assert records[0].year == 2019


class TestRemoteCatalog:
    URL = "https://example.org/data/publications.json"

    def test_fetches_over_http(self, catalog_payload):
        response = MagicMock()
        response.json.return_value = catalog_payload
        response.raise_for_status.return_value = None

        with patch("portfolio.catalog.requests.get", return_value=response) as mock_get:
            records = PublicationCatalog(self.URL).load()

        mock_get.assert_called_once_with(self.URL, timeout=None)
        assert len(records) == 3

    def test_network_error(self):
        with patch("portfolio.catalog.requests.get",
                   side_effect=requests.ConnectionError("unreachable")):
            catalog = PublicationCatalog(self.URL)
            with pytest.raises(CatalogLoadError):
                catalog.load()
        assert catalog.publications == []

    def test_http_error_status(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")

        with patch("portfolio.catalog.requests.get", return_value=response):
            with pytest.raises(CatalogLoadError):
                PublicationCatalog(self.URL).load()


class TestLookups:
    def test_find(self, catalog_file):
        catalog = PublicationCatalog(str(catalog_file))
        catalog.load()

        assert catalog.find("b1").title == "Water Rights in Practice"
        assert catalog.find("nope") is None

    def test_featured_in_catalog_order(self, catalog_file):
        catalog = PublicationCatalog(str(catalog_file))
        catalog.load()

        assert [p.id for p in catalog.featured()] == ["j1", "c1"]
        assert [p.id for p in catalog.featured(limit=1)] == ["j1"]
