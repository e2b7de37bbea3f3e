"""Tests for the /health endpoint."""

import json
import urllib.error
import urllib.request

import pytest
from starlette.testclient import TestClient

from websim_tools.health import create_health_app, start_health_server


@pytest.fixture()
def health_url():
    running = start_health_server(0, host="127.0.0.1")
    yield f"http://127.0.0.1:{running.port}"
    running.stop()


def test_health_reports_identity(health_url) -> None:
    with urllib.request.urlopen(f"{health_url}/health", timeout=5) as response:
        assert response.status == 200
        assert response.headers["Content-Type"] == "application/json"
        body = json.loads(response.read())
    assert body["status"] == "healthy"
    assert body["server"] == "websim-mcp-server"
    assert body["version"] == "1.0.0"
    assert body["uptime"] >= 0
    assert "timestamp" in body


def test_other_paths_are_404(health_url) -> None:
    with pytest.raises(urllib.error.HTTPError) as info:
        urllib.request.urlopen(f"{health_url}/metrics", timeout=5)
    assert info.value.code == 404
    assert json.loads(info.value.read()) == {"error": "Not Found"}


def test_uptime_counts_from_app_creation() -> None:
    ticks = iter([1000.0, 1002.5, 1004.0])
    app = create_health_app(clock=lambda: next(ticks))

    with TestClient(app) as client:
        assert client.get("/health").json()["uptime"] == 2.5
        assert client.get("/health").json()["uptime"] == 4.0


def test_stop_releases_the_thread() -> None:
    running = start_health_server(0, host="127.0.0.1")
    running.stop()
    assert not running.thread.is_alive()
