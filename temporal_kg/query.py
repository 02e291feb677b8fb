"""Builders for the Gremlin query strings sent to the graph database."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from temporal_kg.errors import ErrorKind, GraphError
from temporal_kg.types import Edge, Node, TemporalRange

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SECOND = timedelta(seconds=1)


def _to_json(value: Any) -> str:
    try:
        return json.dumps(
            value,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise GraphError(ErrorKind.SERIALIZATION, str(exc)) from exc


def _property_steps(fields: Mapping[str, Any]) -> str:
    """Render ``.property('key', json)`` steps in sorted key order."""
    return "".join(
        f".property('{key}', {_to_json(fields[key])})" for key in sorted(fields)
    )


def _epoch_seconds(moment: datetime) -> int:
    return (moment - _EPOCH) // _SECOND


def _temporal_filters(temporal_range: TemporalRange | None) -> str:
    if temporal_range is None:
        return ""
    steps = []
    if temporal_range.start is not None:
        steps.append(
            f".has('valid_time.start', gte({_epoch_seconds(temporal_range.start)}))"
        )
    if temporal_range.end is not None:
        steps.append(f".has('valid_time.end', lte({_epoch_seconds(temporal_range.end)}))")
    return "".join(steps)


def create_node(node: Node) -> str:
    """Query adding ``node`` as a vertex labelled with its entity type."""
    fields = {
        "id": str(node.id),
        "label": node.label,
        "entity_type": str(node.entity_type),
        "properties": dict(node.properties),
        "valid_time": node.valid_time.to_dict(),
        "transaction_time": node.transaction_time.to_dict(),
    }
    return f"g.addV('{node.entity_type}'){_property_steps(fields)}"


def get_node(node_id: UUID) -> str:
    """Query fetching a node by ID."""
    return f"g.V('{node_id}').hasLabel('node')"


def update_node(node: Node) -> str:
    """Query overwriting the label, properties and times of a node."""
    fields = {
        "label": node.label,
        "properties": dict(node.properties),
        "valid_time": node.valid_time.to_dict(),
        "transaction_time": node.transaction_time.to_dict(),
    }
    return f"g.V('{node.id}'){_property_steps(fields)}"


def delete_node(node_id: UUID) -> str:
    """Query dropping a node."""
    return f"g.V('{node_id}').drop()"


def create_edge(edge: Edge) -> str:
    """Query adding ``edge`` between its source and target vertices."""
    fields = {
        "id": str(edge.id),
        "properties": dict(edge.properties),
        "valid_time": edge.valid_time.to_dict(),
        "transaction_time": edge.transaction_time.to_dict(),
    }
    return (
        f"g.V('{edge.source_id}').addE('{edge.label}').to(V('{edge.target_id}'))"
        f"{_property_steps(fields)}"
    )


def get_edge(edge_id: UUID) -> str:
    """Query fetching an edge by ID."""
    return f"g.E('{edge_id}').hasLabel('edge')"


def update_edge(edge: Edge) -> str:
    """Query overwriting the properties and times of an edge."""
    fields = {
        "properties": dict(edge.properties),
        "valid_time": edge.valid_time.to_dict(),
        "transaction_time": edge.transaction_time.to_dict(),
    }
    return f"g.E('{edge.id}'){_property_steps(fields)}"


def delete_edge(edge_id: UUID) -> str:
    """Query dropping an edge."""
    return f"g.E('{edge_id}').drop()"


def get_edges_for_node(node_id: UUID, temporal_range: TemporalRange | None = None) -> str:
    """Query for all edges touching a node, optionally filtered by valid time."""
    return f"g.V('{node_id}').bothE(){_temporal_filters(temporal_range)}"


def get_connected_nodes(
    node_id: UUID, temporal_range: TemporalRange | None = None
) -> str:
    """Query for all neighbours of a node, optionally filtered by valid time."""
    return f"g.V('{node_id}').both(){_temporal_filters(temporal_range)}"


def get_nodes_by_label(label: str) -> str:
    """Query for vertices carrying ``label``."""
    return f"g.V().hasLabel('{label}')"


def get_edges_by_label(label: str) -> str:
    """Query for edges carrying ``label``."""
    return f"g.E().hasLabel('{label}')"


def get_edges_between(source_id: UUID, target_id: UUID) -> str:
    """Query for edges running from ``source_id`` to ``target_id``."""
    return f"g.V('{source_id}').outE().where(inV().hasId('{target_id}'))"


def get_edges_from(source_id: UUID) -> str:
    """Query for outgoing edges of a node."""
    return f"g.V('{source_id}').outE()"


def get_edges_to(target_id: UUID) -> str:
    """Query for incoming edges of a node."""
    return f"g.V('{target_id}').inE()"


def get_vertex(vertex_id: str) -> str:
    """Query fetching a vertex by raw ID."""
    return f"g.V('{vertex_id}')"