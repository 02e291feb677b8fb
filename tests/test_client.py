import json

import httpx
import pytest
import respx

from temporal_kg.client import TemporalGraphClient, main

BASE = "http://testserver"


def _echo(request: httpx.Request) -> httpx.Response:
    return httpx.Response(201, json=json.loads(request.content))


def test_health_check_returns_json():
    with respx.mock() as router:
        router.get(f"{BASE}/health").respond(json={"status": "healthy", "uptime": 3})
        with TemporalGraphClient(BASE) as client:
            assert client.health_check() == {"status": "healthy", "uptime": 3}


def test_create_node_posts_payload():
    payload = {"id": "abc", "label": "Jane Smith"}
    with respx.mock() as router:
        route = router.post(f"{BASE}/nodes").mock(side_effect=_echo)
        with TemporalGraphClient(BASE) as client:
            result = client.create_node(payload)
        assert result == payload
        assert json.loads(route.calls.last.request.content) == payload


def test_get_node_uses_id_in_path():
    with respx.mock() as router:
        route = router.get(f"{BASE}/nodes/node-1").respond(json={"label": "Jane Smith"})
        with TemporalGraphClient(BASE) as client:
            assert client.get_node("node-1") == {"label": "Jane Smith"}
        assert route.called


def test_create_edge_and_query():
    with respx.mock() as router:
        router.post(f"{BASE}/edges").mock(side_effect=_echo)
        router.post(f"{BASE}/knowledge/query").respond(json={"results": []})
        with TemporalGraphClient(BASE) as client:
            assert client.create_edge({"label": "EMPLOYED_AT"}) == {"label": "EMPLOYED_AT"}
            assert client.query_knowledge({"include_edges": True}) == {"results": []}


def test_non_json_response_raises():
    with respx.mock() as router:
        router.post(f"{BASE}/knowledge/query").respond(text="not json")
        with TemporalGraphClient(BASE) as client:
            with pytest.raises(ValueError):
                client.query_knowledge({})


def test_connection_error_propagates():
    with respx.mock() as router:
        router.get(f"{BASE}/health").mock(side_effect=httpx.ConnectError("refused"))
        with TemporalGraphClient(BASE) as client:
            with pytest.raises(httpx.ConnectError):
                client.health_check()


def test_supplied_client_is_not_closed():
    http = httpx.Client()
    with TemporalGraphClient(BASE, client=http):
        pass
    assert http.is_closed is False
    http.close()


def test_main_runs_demo(capsys):
    query_body = {
        "results": [
            {
                "label": "Jane Smith",
                "properties": {"name": "Jane Smith"},
                "edges": [{"label": "EMPLOYED_AT", "target": {"label": "Tech Innovators"}}],
            }
        ]
    }
    with respx.mock() as router:
        router.get(f"{BASE}/health").respond(json={"status": "healthy"})
        router.post(f"{BASE}/nodes").mock(side_effect=_echo)
        router.post(f"{BASE}/edges").mock(side_effect=_echo)
        router.get(url__regex=rf"{BASE}/nodes/.+").respond(
            json={"label": "Jane Smith", "properties": {"name": "Jane Smith"}}
        )
        router.post(f"{BASE}/knowledge/query").respond(json=query_body)
        code = main(["--base-url", BASE])
    out = capsys.readouterr().out
    assert code == 0
    assert 'API Health: "healthy"' in out
    assert 'Person: "Jane Smith" ("Jane Smith")' in out
    assert "Query returned 1 results" in out
    assert '"EMPLOYED_AT" -> "Tech Innovators"' in out


def test_main_stops_when_health_check_fails(capsys):
    with respx.mock() as router:
        health = router.get(f"{BASE}/health").mock(side_effect=httpx.ConnectError("refused"))
        nodes = router.post(f"{BASE}/nodes").mock(side_effect=_echo)
        code = main(["--base-url", BASE])
    out = capsys.readouterr().out
    assert code == 0
    assert "API Health check failed" in out
    assert health.called
    assert not nodes.called


def test_main_reports_later_failure(capsys):
    with respx.mock() as router:
        router.get(f"{BASE}/health").respond(json={"status": "healthy"})
        router.post(f"{BASE}/nodes").respond(text="oops")
        code = main(["--base-url", BASE])
    assert code == 1
    assert "Error:" in capsys.readouterr().err