import json

import httpx
import pytest

from product_advisor.data_providers import catalog as catalog_module
from product_advisor.data_providers.catalog import Catalog, CatalogLoader
from product_advisor.schemas import Product


def write_catalog(tmp_path, rows):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_load_bundled_catalog():
    catalog = CatalogLoader().load()
    assert len(catalog) > 0
    assert "Smart Home" in catalog.categories()


def test_load_skips_malformed_rows(tmp_path):
    path = write_catalog(tmp_path, [
        {"brand": "A", "product_name": "ok", "price": 10, "category": "X", "description": "d"},
        {"brand": "A", "product_name": "negative", "price": -5, "category": "X"},
        {"brand": "A"},
    ])
    loader = CatalogLoader()
    catalog = loader.load(path)
    assert [p.product_name for p in catalog] == ["ok"]
    assert loader.skipped_rows == 2
    assert "Skipped 2" in loader.last_error


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CatalogLoader().load(tmp_path / "missing.json")


def test_load_non_array_payload(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text('{"products": []}', encoding="utf-8")
    loader = CatalogLoader()
    assert len(loader.load(path)) == 0
    assert loader.last_error == "Catalog payload is not a JSON array."


def test_load_invalid_json_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("[{not json", encoding="utf-8")
    loader = CatalogLoader()
    assert len(loader.load(path)) == 0
    assert loader.last_error == "Catalog file is not valid JSON."


def _patch_transport(monkeypatch, handler):
    real_client = httpx.Client
    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(catalog_module.httpx, "Client", lambda **kwargs: real_client(transport=transport, **kwargs))


def test_load_from_url(monkeypatch):
    rows = [{"brand": "A", "product_name": "remote", "price": 1, "category": "X"}]
    _patch_transport(monkeypatch, lambda request: httpx.Response(200, json=rows))
    catalog = CatalogLoader().load("https://example.com/catalog.json")
    assert [p.product_name for p in catalog] == ["remote"]


def test_load_from_url_http_error(monkeypatch):
    _patch_transport(monkeypatch, lambda request: httpx.Response(503, text="down"))
    loader = CatalogLoader()
    assert len(loader.load("https://example.com/catalog.json")) == 0
    assert loader.last_error == "Catalog HTTP 503"


def test_candidates_for_is_case_insensitive_substring():
    catalog = Catalog([
        Product(brand="A", product_name="p1", price=1, category="Healthtech and Wellness"),
        Product(brand="B", product_name="p2", price=2, category="Pain Relief"),
        Product(brand="C", product_name="p3", price=3, category="Kitchen"),
    ])
    out = catalog.candidates_for(["wellness", "PAIN", " "])
    assert [p.product_name for p in out] == ["p1", "p2"]
    assert catalog.candidates_for([]) == []


def test_categories_first_seen_order():
    catalog = Catalog([
        Product(brand="A", product_name="p1", price=1, category="Kitchen"),
        Product(brand="B", product_name="p2", price=2, category="Fitness"),
        Product(brand="C", product_name="p3", price=3, category="Kitchen"),
    ])
    assert catalog.categories() == ["Kitchen", "Fitness"]
