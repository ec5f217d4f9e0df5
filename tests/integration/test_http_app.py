"""
Integration Tests for the HTTP App
===================================
Tests health/version endpoints and authentication with Starlette's TestClient
"""

import pytest
from starlette.testclient import TestClient


@pytest.fixture
def http_config(test_config):
    test_config.set('server.authentication.enabled', False)
    return test_config


@pytest.mark.integration
@pytest.mark.http
class TestHttpApp:
    """Starlette app wrapping the FastMCP http app"""

    def test_health(self, http_config):
        """Health endpoints answer OK"""
        from server import create_app

        with TestClient(create_app(http_config)) as client:
            for path in ("/health", "/healthz"):
                response = client.get(path)
                assert response.status_code == 200
                assert response.text == "OK"

    def test_version(self, http_config):
        """Version endpoint reports name and version"""
        from server import create_app

        with TestClient(create_app(http_config)) as client:
            response = client.get("/version")

        assert response.status_code == 200
        assert response.json() == {
            "name": "mcp-python-template",
            "version": "1.0.0",
            "status": "running",
        }

    def test_mcp_requires_auth_when_enabled(self, test_config, sample_api_keys):
        """MCP endpoint rejects requests without a bearer key"""
        from server import create_app

        test_config.set('server.authentication.api_keys', sample_api_keys)

        with TestClient(create_app(test_config)) as client:
            assert client.get("/health").status_code == 200
            response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1})

        assert response.status_code == 401
        assert response.json()["error"] == "Authentication required"
