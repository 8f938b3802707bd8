"""Tests for health endpoint and app wiring."""

import pytest
from fastapi.testclient import TestClient

from classroom.config.app_config import AppConfig, parse_config
from classroom.core.store import Table
from classroom.web.api import create_app


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_ok(self, client):
        """Health endpoint returns status ok."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health_returns_version(self, client):
        """Health endpoint returns version."""
        data = client.get("/health").json()
        assert data["version"] == "0.1.0"

    def test_health_returns_timestamp(self, client):
        """Health endpoint returns timestamp."""
        data = client.get("/health").json()
        # ISO format check
        assert "T" in data["timestamp"]


class TestCreateApp:
    """Tests for the app factory."""

    @pytest.fixture(autouse=True)
    def _no_project_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CLASSROOM_CONFIG", raising=False)

    def test_default_app_is_seeded(self):
        app = create_app(config=AppConfig())
        assert app.state.store.count(Table.COURSES) == 7

    def test_seed_disabled(self):
        app = create_app(config=parse_config({"seed": {"enabled": False}}))
        assert app.state.store.count(Table.COURSES) == 0

    def test_apps_do_not_share_state(self):
        first = TestClient(create_app(config=AppConfig()))
        second = TestClient(create_app(config=AppConfig()))

        first.post("/api/progress", json={"userId": 1, "courseId": 7, "percentComplete": 10})

        assert len(first.get("/api/progress").json()) == 3
        assert len(second.get("/api/progress").json()) == 2

    def test_lifespan_runs(self):
        with TestClient(create_app(config=AppConfig())) as client:
            assert client.get("/health").status_code == 200


class TestErrorHandling:
    """Unexpected errors become a generic 500."""

    def test_unhandled_error_is_500(self, seeded_store, monkeypatch):
        from classroom.core.queries import QueryService

        def explode(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(QueryService, "all_subjects", explode)
        client = TestClient(create_app(store=seeded_store, config=AppConfig()), raise_server_exceptions=False)

        response = client.get("/api/subjects")
        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    def test_unknown_route_is_404_message(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert "message" in response.json()
