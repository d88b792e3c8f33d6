# tests/backend/conftest.py

import os

os.environ.setdefault("API_KEY", "test-api-key")

import pytest
from fastapi.testclient import TestClient
from main import app
from utils.dependencies import ServerInfo, get_server_info


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """
    Creates a FastAPI TestClient fixture for the entire test session.
    This client can be used to make HTTP requests to the application.
    """
    client = TestClient(app)
    yield client
    client.close()


@pytest.fixture
def api_headers() -> dict[str, str]:
    return {"X-API-Key": os.environ["API_KEY"]}


@pytest.fixture
def server_info(request) -> ServerInfo:
    """
    Server info of a Go server that has no secure site url configured.
    Indirect parametrization can override any of its fields.
    """
    overrides = getattr(request, "param", {})
    return ServerInfo(
        **{"server_id": "server-1", "site_url": "http://gocd.example.com:8153/go", **overrides}
    )


@pytest.fixture
def override_server_info(server_info: ServerInfo):
    """Makes the app resolve `get_server_info` to the `server_info` fixture."""
    app.dependency_overrides[get_server_info] = lambda: server_info
    yield server_info
    app.dependency_overrides.pop(get_server_info, None)
