"""Tests for overlay_agent.app: application creation and middleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient


class TestAppInstance:
    def test_app_exists(self):
        from overlay_agent.app import app
        assert isinstance(app, FastAPI)

    def test_app_title(self):
        from overlay_agent.app import app
        assert app.title == "overlay-agent API"

    def test_app_version(self):
        from overlay_agent.app import app
        from overlay_agent.config import APP_VERSION
        assert app.version == APP_VERSION

    def test_routes_mounted(self):
        from overlay_agent.app import app
        paths = {route.path for route in app.routes}
        assert "/api/agent/parse" in paths
        assert "/health" in paths


class TestRequestIdMiddleware:
    def test_returns_request_id_from_header(self):
        from overlay_agent.app import app
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/health", headers={"X-Request-ID": "test-req-123"})
        assert response.headers.get("X-Request-ID") == "test-req-123"

    def test_generates_request_id_if_missing(self):
        from overlay_agent.app import app
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/health")
        req_id = response.headers.get("X-Request-ID")
        assert req_id is not None
        assert len(req_id) == 12


class TestExceptionHandlers:
    def test_validation_error_renders_json(self):
        from overlay_agent.app import app
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/api/agent/parse", json={"command": ""})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationError"
        assert body["path"] == "/api/agent/parse"
        assert body["is_retryable"] is False

    def test_unhandled_exception_is_500(self, monkeypatch):
        from overlay_agent.app import app
        import overlay_agent.api.parse as parse_api

        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(parse_api, "parse_command", boom)
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/api/agent/parse", json={"command": "higherify"})
        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "RuntimeError"
        assert body["message"] == "boom"
