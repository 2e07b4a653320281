"""
Tests for the FastAPI backend in scent_mapper/api/.

The dataset is placed on app.state before the client starts, so the
lifespan handler skips loading from disk.

Run: pytest tests/test_api.py -v
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from scent_mapper.api.main import create_app
from scent_mapper.dataset import parse_records
from scent_mapper.errors import NormalizationFailure

from .sample_data import SAMPLE_TEXT

# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def client():
    app = create_app()
    app.state.dataset = parse_records(SAMPLE_TEXT)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def empty_client(tmp_path):
    app = create_app(tmp_path / "missing.csv")
    with TestClient(app) as c:
        yield c


# ── Health ──────────────────────────────────────────────────────────────────


class TestHealth:

    def test_root(self, client):
        body = client.get("/").json()
        assert body["name"] == "Scent Mapper API"
        assert body["endpoints"]["clusters"] == "/api/clusters"

    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["dataset_loaded"] is True
        assert body["n_records"] == 8
        assert body["accord_columns"] == ["mainaccord1", "mainaccord2", "mainaccord3"]

    def test_health_normalization_flag(self, client, monkeypatch):
        monkeypatch.setattr("scent_mapper.api.main.has_openai", lambda: False)
        assert client.get("/api/health").json()["normalization_available"] is False

    def test_health_without_dataset(self, empty_client):
        body = empty_client.get("/api/health").json()
        assert body["dataset_loaded"] is False
        assert "not found" in body["load_error"]

    @pytest.mark.parametrize("path", ["/api/accords", "/api/clusters", "/api/trends"])
    def test_503_without_dataset(self, empty_client, path):
        assert empty_client.get(path).status_code == 503


# ── /api/accords ────────────────────────────────────────────────────────────


class TestAccords:

    def test_default(self, client):
        body = client.get("/api/accords").json()
        assert body["qualifying_records"] == 7
        assert [s["label"] for s in body["stats"]][:3] == ["woody", "citrus", "floral"]

    def test_gender_and_top_n(self, client):
        body = client.get("/api/accords", params={"gender": "women", "top_n": 2}).json()
        assert body["total_records"] == 3
        assert [s["label"] for s in body["stats"]] == ["floral", "sweet"]

    def test_query(self, client):
        body = client.get("/api/accords", params={"query": "AR"}).json()
        assert [s["label"] for s in body["stats"]] == ["aromatic"]

    def test_sort_ascending_by_label(self, client):
        body = client.get("/api/accords", params={"sort": "label", "descending": False}).json()
        labels = [s["label"] for s in body["stats"]]
        assert labels == sorted(labels)

    def test_unknown_sort(self, client):
        assert client.get("/api/accords", params={"sort": "bogus"}).status_code == 400

    def test_normalize_failure_notice(self, client, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        body = client.get("/api/accords", params={"normalize": True}).json()
        assert [n["kind"] for n in body["notices"]] == ["normalization_failure"]
        assert body["stats"][0]["label"] == "woody"


# ── /api/clusters ───────────────────────────────────────────────────────────


class TestClusters:

    def test_default(self, client):
        body = client.get("/api/clusters", params={"k": 3}).json()
        assert body["n_points"] == 6
        assert body["k"] == 3
        assert sum(c["size"] for c in body["clusters"]) == 6

    def test_sorted_by_size(self, client):
        body = client.get("/api/clusters", params={"k": 3}).json()
        sizes = [c["size"] for c in body["clusters"]]
        assert sizes == sorted(sizes, reverse=True)

    def test_clamped_k(self, client):
        body = client.get("/api/clusters", params={"k": 50}).json()
        assert body["k"] == 6
        assert any(n["kind"] == "cluster_count_adjusted" for n in body["notices"])

    def test_search_highlight(self, client):
        body = client.get("/api/clusters", params={"k": 2, "search": "chanel"}).json()
        assert [p["title"] for p in body["points"] if p["highlighted"]] == ["B"]

    def test_cluster_id(self, client):
        body = client.get("/api/clusters", params={"k": 2, "cluster_id": 0}).json()
        assert body["points"]
        assert all(p["cluster_id"] == 0 for p in body["points"])

    def test_inverted_years(self, client):
        resp = client.get("/api/clusters", params={"year_min": 2024, "year_max": 2019})
        assert resp.status_code == 400

    def test_invalid_k(self, client):
        assert client.get("/api/clusters", params={"k": 0}).status_code == 422

    def test_unknown_sort(self, client):
        assert client.get("/api/clusters", params={"sort": "bogus"}).status_code == 400


# ── /api/trends ─────────────────────────────────────────────────────────────


class TestTrends:

    def test_default_window(self, client):
        body = client.get("/api/trends").json()
        assert body["top_labels"] == ["floral", "woody", "citrus", "aromatic", "sweet"]
        assert [b["year"] for b in body["buckets"]] == list(range(2019, 2025))

    def test_gender(self, client):
        body = client.get("/api/trends", params={"gender": "women"}).json()
        assert body["top_labels"][:2] == ["floral", "sweet"]
        assert [b["total_records"] for b in body["buckets"]] == [0, 2, 0, 0, 1, 0]

    def test_computed_off_the_event_loop(self, client, monkeypatch):
        seen = []

        def compute(dataset, **kwargs):
            try:
                asyncio.get_running_loop()
                seen.append("event loop")
            except RuntimeError:
                seen.append("worker thread")
            return {"params": kwargs}

        monkeypatch.setattr("scent_mapper.api.routes.trends._compute_trends", compute)
        body = client.get("/api/trends", params={"top_n": 3}).json()
        assert seen == ["worker thread"]
        assert body["params"]["top_n"] == 3

    def test_inverted(self, client):
        assert client.get("/api/trends", params={"start": 2024, "end": 2019}).status_code == 400

    def test_window_too_large(self, client):
        assert client.get("/api/trends", params={"start": 1000, "end": 2024}).status_code == 400


# ── /api/labels/normalize ───────────────────────────────────────────────────


class TestNormalizeLabels:

    def test_passthrough(self, client):
        body = client.post(
            "/api/labels/normalize",
            json={"labels": ["white floral", "woody", "woody"], "should_normalize": False},
        ).json()
        assert body["labels"] == ["white floral", "woody"]
        assert body["normalized_labels"] == ["white floral", "woody"]

    def test_normalized(self, client, monkeypatch):
        monkeypatch.setattr(
            "scent_mapper.api.routes.labels.normalize_accord_labels",
            lambda labels, should_normalize: ["white  floral", "woody"],
        )
        body = client.post("/api/labels/normalize", json={"labels": ["white floral", "woody"]}).json()
        assert body["mapping"] == {"white floral": "white-floral", "woody": "woody"}

    def test_service_failure(self, client, monkeypatch):
        def fail(labels, should_normalize):
            raise NormalizationFailure("service down")

        monkeypatch.setattr("scent_mapper.api.routes.labels.normalize_accord_labels", fail)
        resp = client.post("/api/labels/normalize", json={"labels": ["a b"]})
        assert resp.status_code == 502
        assert resp.json()["detail"] == "service down"
