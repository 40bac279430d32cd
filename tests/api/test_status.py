"""Tests for the status endpoints."""


class TestHealth:
    def test_health_ok(self, client):
        from overlay_agent.config import APP_VERSION

        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["version"] == APP_VERSION

    def test_health_lists_built_parsers(self, client):
        client.post("/api/agent/parse", json={"command": "higherify", "channel": "farcaster"})
        resp = client.get("/health")
        assert "farcaster" in resp.json()["parsers"]

    def test_ready_builds_default_parser(self, client):
        resp = client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ready"}
