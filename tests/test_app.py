import logging
from datetime import timedelta

from fastapi.testclient import TestClient

from temporal_kg import handlers
from temporal_kg.app import ApiState, create_app


class _Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def test_uptime_follows_clock():
    clock = _Clock(10.0)
    state = ApiState(clock=clock)
    assert state.uptime() == timedelta(0)
    clock.now = 25.5
    assert state.uptime() == timedelta(seconds=15.5)


def test_health_route_reports_state_uptime():
    clock = _Clock(0.0)
    state = ApiState(clock=clock)
    clock.now = 7.9
    client = TestClient(create_app(state))
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["uptime"] == 7
    assert body["status"] == "healthy"
    assert body["components"] == [{"name": "api", "status": "Healthy", "details": None}]


def test_version_route():
    client = TestClient(create_app())
    body = client.get("/version").json()
    assert body["version"] == handlers.VERSION
    assert body["commit_hash"] == "unknown"


def test_openapi_document_served():
    client = TestClient(create_app())
    response = client.get("/api-docs/openapi.json")
    assert response.status_code == 200
    info = response.json()["info"]
    assert info["title"] == "Temporal Knowledge Graph API"
    assert info["version"] == "0.1.0"


def test_swagger_ui_served():
    client = TestClient(create_app())
    response = client.get("/swagger-ui")
    assert response.status_code == 200
    assert "/api-docs/openapi.json" in response.text


def test_node_routes_not_mounted():
    client = TestClient(create_app())
    assert client.get("/nodes/abc").status_code == 404


def test_requests_are_logged(caplog):
    client = TestClient(create_app())
    with caplog.at_level(logging.INFO, logger="temporal_kg.app"):
        client.get("/version")
    messages = [record.getMessage() for record in caplog.records]
    assert any("method=GET" in m and "path=/version" in m and "status=200" in m for m in messages)