"""Tests for the /health endpoint."""

from __future__ import annotations

from fastapi.testclient import TestClient

from customerbook.config import Config
from customerbook.storage.schema import init_db
from customerbook.web.app import create_app


class TestHealthEndpoint:
    def test_healthy_response(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        init_db(db_path)
        config = Config(database_path=db_path)
        app = create_app(config)
        client = TestClient(app)

        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["database"] == "ok"

    def test_unhealthy_when_db_missing(self, tmp_path):
        db_path = str(tmp_path / "nonexistent" / "missing.db")
        config = Config(database_path=db_path)
        app = create_app(config)
        client = TestClient(app, raise_server_exceptions=False)

        resp = client.get("/health")
        assert resp.status_code == 503
        data = resp.json()
        assert data["status"] == "unhealthy"
        assert data["database"] == "error"
        assert "detail" in data

    def test_health_not_under_api_prefix(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        init_db(db_path)
        config = Config(database_path=db_path)
        app = create_app(config)
        client = TestClient(app)

        # /health should work at root
        assert client.get("/health").status_code == 200
        # /api/health should NOT exist
        resp = client.get("/api/health")
        assert resp.status_code != 200

    def test_reports_customer_count(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        init_db(db_path)
        client = TestClient(create_app(Config(database_path=db_path)))
        client.post(
            "/api/customers",
            json={"first_name": "Ada", "last_name": "Lovelace", "phone_number": "555-0100"},
        )

        data = client.get("/health").json()
        assert data["customers"] == 1

    def test_unhealthy_when_schema_missing(self, tmp_path):
        db_path = str(tmp_path / "empty.db")
        client = TestClient(create_app(Config(database_path=db_path)))

        resp = client.get("/health")
        assert resp.status_code == 503
        assert "customers" in resp.json()["detail"]
