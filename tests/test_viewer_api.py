"""Tests for the viewer web API."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from farmlands.core.config import DatasetConfig, Settings
from farmlands.gis.store import DatasetError
from farmlands.web.app import create_app
from farmlands.web.presentation import Presentation


@pytest.fixture
def app(scenario_store, tmp_path):
    return create_app(
        settings=Settings(),
        store=scenario_store,
        presentation=Presentation(tmp_path / "missing.yml"),
    )


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def view_id(client):
    resp = client.post("/api/views")
    assert resp.status_code == 200
    return resp.json()["view_id"]


class TestPageAndHealth:
    def test_viewer_page(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Early Colonial Farmlands" in resp.text
        assert 'max="1780"' in resp.text

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "healthy"
        assert data["records"] == 3

    def test_dataset_summary(self, client):
        data = client.get("/api/dataset").json()
        assert data["total"] == 3
        assert data["unowned"] == 1

    def test_static_script_served(self, client):
        assert client.get("/static/viewer.js").status_code == 200

    def test_script_only_draws_newest_response(self, client):
        script = client.get("/static/viewer.js").text
        assert "seq === latestRequest" in script
        assert "clearTimeout(yearTimer)" in script


class TestViewLifecycle:
    def test_create_view_has_defaults(self, client):
        data = client.post("/api/views").json()
        assert data["year_filter"]["enabled"] is False
        assert data["year_filter"]["year"] == 1900
        assert data["fit_bounds"] is None
        assert len(data["features"]["features"]) == 3

    def test_get_view(self, client, view_id):
        resp = client.get(f"/api/views/{view_id}")
        assert resp.status_code == 200
        assert resp.json()["view_id"] == view_id

    def test_unknown_view(self, client):
        assert client.get("/api/views/nope").status_code == 404
        assert client.put("/api/views/nope/year", json={"year": 1700}).status_code == 404

    def test_end_view(self, client, view_id):
        assert client.delete(f"/api/views/{view_id}").status_code == 200
        assert client.get(f"/api/views/{view_id}").status_code == 404
        assert client.delete(f"/api/views/{view_id}").status_code == 404

    def test_views_are_independent(self, client, view_id):
        other = client.post("/api/views").json()["view_id"]
        client.put(f"/api/views/{view_id}/year-filter", json={"enabled": True})
        assert client.get(f"/api/views/{other}").json()["year_filter"]["enabled"] is False


class TestViewActions:
    def test_year_filter_scenario(self, client, view_id):
        client.put(f"/api/views/{view_id}/year", json={"year": 1700})
        data = client.put(f"/api/views/{view_id}/year-filter", json={"enabled": True}).json()
        names = [f["properties"]["name"] for f in data["features"]["features"]]
        assert names == ["Goede Hoop", "Nieuwland"]
        assert data["owners"]["items"] == [{"owner": "Van Riebeeck", "count": 2}]

    def test_year_is_clamped(self, client, view_id):
        data = client.put(f"/api/views/{view_id}/year", json={"year": 1500}).json()
        assert data["year_filter"]["year"] == 1650

    def test_invalid_payload(self, client, view_id):
        resp = client.put(f"/api/views/{view_id}/year", json={"year": "soon"})
        assert resp.status_code == 422

    def test_search_success_then_miss(self, client, view_id):
        hit = client.post(f"/api/views/{view_id}/search", json={"query": "NIEUWLAND"}).json()
        assert hit["found"] is True
        assert hit["fit_bounds"]["sequence"] == 1
        assert hit["search"]["notice"] is None

        miss = client.post(f"/api/views/{view_id}/search", json={"query": "Atlantis"}).json()
        assert miss["found"] is False
        assert miss["search"]["notice"] == "Region not found!"
        assert miss["fit_bounds"] == hit["fit_bounds"]

        cleared = client.delete(f"/api/views/{view_id}/notice").json()
        assert cleared["search"]["notice"] is None

    def test_owner_highlight_and_collapse(self, client, view_id):
        client.put(f"/api/views/{view_id}/owners", json={"visible": True})
        data = client.put(
            f"/api/views/{view_id}/owners/highlight", json={"owner": "Van Riebeeck"}
        ).json()
        assert data["owners"]["highlighted"] == "Van Riebeeck"
        styles = [f["_render"]["style"]["color"] for f in data["features"]["features"]]
        assert styles.count("#990000") == 2

        data = client.put(f"/api/views/{view_id}/owners", json={"visible": False}).json()
        assert data["owners"]["highlighted"] is None

    def test_farm_ranking(self, client, view_id):
        client.put(f"/api/views/{view_id}/farms", json={"visible": True})
        data = client.put(f"/api/views/{view_id}/farms/rank", json={"by_size": True}).json()
        assert data["farms"]["visible"] is True
        assert data["farms"]["rank_by_size"] is True
        assert [f["name"] for f in data["farms"]["items"]] == ["Nieuwland", "Oosthuizen", "Goede Hoop"]

    def test_set_query(self, client, view_id):
        data = client.put(f"/api/views/{view_id}/query", json={"query": "Goede"}).json()
        assert data["search"]["query"] == "Goede"


class TestDatasetLoading:
    def test_loads_configured_dataset(self, tmp_path, scenario_data):
        path = tmp_path / "farms.json"
        path.write_text(json.dumps(scenario_data), encoding="utf-8")
        settings = Settings(dataset=DatasetConfig(path=str(path)))
        client = TestClient(create_app(settings=settings))
        assert client.get("/api/health").json()["records"] == 3

    def test_missing_dataset_is_a_startup_error(self, tmp_path):
        settings = Settings(dataset=DatasetConfig(path=str(tmp_path / "absent.json")))
        with pytest.raises(DatasetError):
            create_app(settings=settings)
