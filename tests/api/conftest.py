"""Shared fixtures for API layer tests."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def app():
    """The real FastAPI application; the parser has no external state to mock."""
    from overlay_agent.app import app as real_app

    yield real_app
    real_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    """Starlette TestClient bound to the app.

    Uses raise_server_exceptions=False so we can assert on HTTP status
    codes (including 4xx/5xx) without the client raising Python exceptions.
    """
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
