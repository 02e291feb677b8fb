"""Request and response bodies of the HTTP API."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Annotated, Any
from uuid import UUID

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    NonNegativeInt,
    PlainSerializer,
    PlainValidator,
)
from pydantic.json_schema import WithJsonSchema

from temporal_kg.errors import GraphError
from temporal_kg.types import EntityType, TemporalRange


def _to_entity_type(value: Any) -> EntityType:
    if isinstance(value, EntityType):
        return value
    if isinstance(value, str):
        return EntityType.parse(value)
    raise ValueError("entity_type must be a string")


def _to_temporal_range(value: Any) -> TemporalRange:
    if isinstance(value, TemporalRange):
        return value
    if not isinstance(value, Mapping):
        raise ValueError("temporal range must be an object")
    try:
        return TemporalRange.from_dict(value)
    except GraphError as exc:
        raise ValueError(str(exc)) from exc


def _temporal_range_to_dict(value: TemporalRange) -> dict[str, Any]:
    return value.to_dict()


EntityTypeField = Annotated[
    EntityType,
    PlainValidator(_to_entity_type),
    PlainSerializer(str, return_type=str),
    WithJsonSchema({"type": "string", "description": "Type of entity (Node, Edge, etc.)"}),
]

TemporalRangeField = Annotated[
    TemporalRange,
    PlainValidator(_to_temporal_range),
    PlainSerializer(_temporal_range_to_dict, return_type=dict),
    WithJsonSchema(
        {
            "type": "object",
            "description": "Temporal validity range",
            "properties": {
                "start": {"type": ["string", "null"], "format": "date-time"},
                "end": {"type": ["string", "null"], "format": "date-time"},
            },
        }
    ),
]


class _Model(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


class StoreRequest(_Model):
    """Text to process and store in the graph."""

    text: str
    context: str | None = None
    metadata: Any = None


class QueryRequest(_Model):
    """A knowledge query, optionally anchored at a point in time."""

    query: str
    timestamp: AwareDatetime | None = None
    time_window: int | None = None


class QueryResult(_Model):
    """One hit of a knowledge query."""

    id: UUID
    content: str
    confidence: float
    timestamp: datetime


class QueryResponse(_Model):
    """Results of a knowledge query together with relevant context."""

    results: list[QueryResult]
    context: list[str]


class CreateNodeRequest(_Model):
    """Body of a node creation request."""

    entity_type: EntityTypeField
    label: str
    properties: dict[str, Any]
    valid_time: TemporalRangeField | None = None


class CreateEdgeRequest(_Model):
    """Body of an edge creation request."""

    source_id: UUID
    target_id: UUID
    label: str
    properties: dict[str, Any]
    valid_time: TemporalRangeField | None = None


class UpdateNodeRequest(_Model):
    """Partial update of a node."""

    label: str | None = None
    properties: dict[str, Any] | None = None
    valid_time: TemporalRangeField | None = None


class UpdateEdgeRequest(_Model):
    """Partial update of an edge."""

    label: str | None = None
    properties: dict[str, Any] | None = None
    valid_time: TemporalRangeField | None = None


class BatchCreateNodesRequest(_Model):
    """Several nodes to create at once."""

    nodes: list[CreateNodeRequest]


class BatchCreateEdgesRequest(_Model):
    """Several edges to create at once."""

    edges: list[CreateEdgeRequest]


class BatchOperationError(_Model):
    """Failure of one item of a batch."""

    index: NonNegativeInt
    error: str


class BatchOperationResponse(_Model):
    """Outcome of a batch operation."""

    success_count: NonNegativeInt
    failures: list[BatchOperationError]


class VersionInfo(_Model):
    """Version and build details of the API."""

    version: str
    build_timestamp: datetime
    commit_hash: str


class ComponentStatus(str, Enum):
    """Health of a single system component."""

    HEALTHY = "Healthy"
    DEGRADED = "Degraded"
    UNHEALTHY = "Unhealthy"


class ComponentHealth(_Model):
    """Health report for one component."""

    name: str
    status: ComponentStatus
    details: str | None = None


class HealthCheckResponse(_Model):
    """Overall service health."""

    status: str
    version: str
    uptime: NonNegativeInt
    components: list[ComponentHealth]