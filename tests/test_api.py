import pytest
from fastapi.testclient import TestClient

from product_search import api
from product_search.catalog import sample_catalog


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api, "CATALOG", sample_catalog())
    return TestClient(api.app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "catalog_ready": True, "products": 8}


def test_search_ranks_and_highlights(client):
    resp = client.post("/search", json={"query": "asus rog"})
    assert resp.status_code == 200
    body = resp.json()
    top = body["results"][0]
    assert top["product"]["title"] == "ASUS ROG Strix RTX 4070 GPU"
    assert top["relevance"] > 0.7
    assert top["highlighted_title"].startswith("<mark>ASUS ROG</mark>")
    assert body["total_results"] == len(body["results"])


def test_search_respects_limit(client):
    resp = client.post("/search", json={"query": "gaming", "limit": 1})
    assert resp.json()["total_results"] == 1


def test_empty_search_lists_catalog(client):
    body = client.post("/search", json={"query": ""}).json()
    assert body["total_results"] == 8
    assert [hit["product"]["id"] for hit in body["results"]] == list(range(1, 9))


def test_search_rejects_bad_threshold(client):
    resp = client.post("/search", json={"query": "gpu", "threshold": 2})
    assert resp.status_code == 422


def test_suggestions(client):
    resp = client.get("/suggestions", params={"q": "asus", "limit": 2})
    assert resp.status_code == 200
    assert resp.json() == {"query": "asus", "suggestions": ["ASUS", "ASUS TUF Gaming Monitor 27"]}


def test_popular(client):
    assert client.get("/popular", params={"limit": 3}).json() == {"terms": ["gaming", "ASUS", "asus"]}


def test_catalog_missing_returns_503(monkeypatch):
    monkeypatch.setattr(api, "CATALOG", None)
    client = TestClient(api.app)
    assert client.post("/search", json={"query": "gpu"}).status_code == 503
    assert client.get("/health").json()["catalog_ready"] is False


def test_initialize_catalog_falls_back_to_sample(monkeypatch):
    monkeypatch.setattr(api, "CATALOG", None)
    products = api.initialize_catalog("/nonexistent/catalog.csv")
    assert len(products) == 8
    assert api.CATALOG is products
