"""HTTP client for the knowledge graph API and a demonstration command."""

from __future__ import annotations

import argparse
import json
import sys
import uuid
from datetime import datetime, timezone
from types import TracebackType
from typing import Any

import httpx

DEFAULT_BASE_URL = "http://localhost:3000"


class TemporalGraphClient:
    """Thin JSON client for the knowledge graph HTTP API."""

    def __init__(self, base_url: str, client: httpx.Client | None = None) -> None:
        self.base_url = base_url
        self._client = client if client is not None else httpx.Client()
        self._owns_client = client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> TemporalGraphClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _get(self, path: str) -> Any:
        return self._client.get(f"{self.base_url}{path}").json()

    def _post(self, path: str, payload: Any) -> Any:
        return self._client.post(f"{self.base_url}{path}", json=payload).json()

    def health_check(self) -> Any:
        """Fetch the service health report."""
        return self._get("/health")

    def create_node(self, data: Any) -> Any:
        """Create a node from a JSON description."""
        return self._post("/nodes", data)

    def get_node(self, node_id: str) -> Any:
        """Fetch a node by its ID."""
        return self._get(f"/nodes/{node_id}")

    def create_edge(self, data: Any) -> Any:
        """Create an edge from a JSON description."""
        return self._post("/edges", data)

    def query_knowledge(self, query: Any) -> Any:
        """Run a knowledge query."""
        return self._post("/knowledge/query", query)


def _field(value: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _show(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _run_demo(client: TemporalGraphClient) -> int:
    print("🚀 Interacting with Temporal Knowledge Graph API...")

    try:
        health = client.health_check()
    except (httpx.HTTPError, ValueError) as exc:
        print(f"❌ API Health check failed: {exc}")
        print("Make sure the server is running in another terminal")
        return 0
    print(f"✅ API Health: {_show(_field(health, 'status'))}")

    person_id = str(uuid.uuid4())
    org_id = str(uuid.uuid4())

    print("📝 Creating a person node...")
    person_node = {
        "id": person_id,
        "entity_type": "Person",
        "label": "Jane Smith",
        "properties": {
            "name": "Jane Smith",
            "age": 28,
            "email": "jane.smith@example.com",
            "skills": ["Rust", "GraphQL", "Machine Learning"],
        },
        "valid_time": {"start": _now(), "end": None},
    }
    person_result = client.create_node(person_node)
    print(f"✅ Created Person node: {_show(_field(person_result, 'id'))}")

    print("📝 Creating an organization node...")
    org_node = {
        "id": org_id,
        "entity_type": "Organization",
        "label": "Tech Innovators",
        "properties": {
            "name": "Tech Innovators Inc.",
            "founded": 2015,
            "location": "San Francisco, CA",
            "industry": "Technology",
            "employees": 250,
        },
        "valid_time": {"start": _now(), "end": None},
    }
    org_result = client.create_node(org_node)
    print(f"✅ Created Organization node: {_show(_field(org_result, 'id'))}")

    print("🔗 Creating an edge between person and organization...")
    edge = {
        "id": str(uuid.uuid4()),
        "source_id": person_id,
        "target_id": org_id,
        "label": "EMPLOYED_AT",
        "properties": {
            "role": "Senior Developer",
            "department": "Engineering",
            "start_date": "2020-03-15",
            "salary": 120000,
        },
        "valid_time": {"start": _now(), "end": None},
    }
    edge_result = client.create_edge(edge)
    print(f"✅ Created EMPLOYED_AT relationship: {_show(_field(edge_result, 'id'))}")

    print("🔍 Retrieving the person node...")
    person = client.get_node(person_id)
    print(
        f"👤 Person: {_show(_field(person, 'label'))} "
        f"({_show(_field(person, 'properties', 'name'))})"
    )

    print("🔍 Running a knowledge query...")
    query = {
        "filter": {
            "entity_type": "Person",
            "properties": {"skills": {"contains": "Rust"}},
        },
        "include_edges": True,
        "time_point": _now(),
    }
    query_result = client.query_knowledge(query)
    results = _field(query_result, "results")
    results = results if isinstance(results, list) else []
    print(f"✅ Query returned {len(results)} results")

    for number, result in enumerate(results, start=1):
        print(f"  Result #{number}: {_show(_field(result, 'label'))}")
        props = _field(result, "properties")
        if isinstance(props, dict):
            print("  Properties:")
            for key, value in props.items():
                print(f"    {key}: {_show(value)}")
        edges = _field(result, "edges")
        if isinstance(edges, list):
            print("  Relationships:")
            for item in edges:
                print(
                    f"    {_show(_field(item, 'label'))} -> "
                    f"{_show(_field(item, 'target', 'label'))}"
                )
        print()

    print("\n✨ API client example completed successfully!")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Walk through creating and querying entities against a running API."""
    parser = argparse.ArgumentParser(
        description="Exercise the temporal knowledge graph HTTP API."
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
    args = parser.parse_args(argv)

    with TemporalGraphClient(args.base_url) as client:
        try:
            return _run_demo(client)
        except (httpx.HTTPError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())