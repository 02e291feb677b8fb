from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from temporal_kg import query
from temporal_kg.errors import ErrorKind, GraphError
from temporal_kg.types import Edge, EntityType, Node, TemporalRange

FIXED = datetime(2024, 1, 1, tzinfo=timezone.utc)
NODE_ID = UUID("12345678-1234-5678-1234-567812345678")
SOURCE_ID = UUID("11111111-1111-1111-1111-111111111111")
TARGET_ID = UUID("22222222-2222-2222-2222-222222222222")
EDGE_ID = UUID("33333333-3333-3333-3333-333333333333")
RANGE_JSON = '{"end":null,"start":"2024-01-01T00:00:00Z"}'


def make_node(node_id=None, now=None, properties=None):
    now = now or datetime.now(timezone.utc)
    return Node(
        id=node_id or uuid4(),
        entity_type=EntityType.EVENT,
        label="test_node",
        properties=properties or {},
        valid_time=TemporalRange(start=now),
        transaction_time=TemporalRange(start=now),
    )


def make_edge(now=None, label="test_edge"):
    now = now or datetime.now(timezone.utc)
    return Edge(
        id=uuid4(),
        source_id=uuid4(),
        target_id=uuid4(),
        label=label,
        valid_time=TemporalRange(start=now),
        transaction_time=TemporalRange(start=now),
    )


def test_create_node_query():
    node = make_node()
    text = query.create_node(node)
    assert str(node.id) in text
    assert node.label in text
    assert "addV" in text


def test_create_edge_query():
    edge = make_edge()
    text = query.create_edge(edge)
    assert str(edge.id) in text
    assert str(edge.source_id) in text
    assert str(edge.target_id) in text
    assert "addE" in text


def test_temporal_query():
    node_id = uuid4()
    now = datetime.now(timezone.utc)
    time_range = TemporalRange(start=now, end=now + timedelta(hours=1))
    text = query.get_edges_for_node(node_id, time_range)
    assert str(node_id) in text
    assert "valid_time.start" in text
    assert "valid_time.end" in text
    assert "gte" in text
    assert "lte" in text


def test_node_query_generation():
    node_text = query.create_node(make_node())
    assert "addV" in node_text
    assert "property('id'" in node_text
    edge_text = query.create_edge(make_edge(label="test_relationship"))
    assert "addE" in edge_text
    assert "property('id'" in edge_text


def test_create_node_exact():
    node = make_node(node_id=NODE_ID, now=FIXED)
    assert query.create_node(node) == (
        "g.addV('Event')"
        ".property('entity_type', \"Event\")"
        f".property('id', \"{NODE_ID}\")"
        ".property('label', \"test_node\")"
        ".property('properties', {})"
        f".property('transaction_time', {RANGE_JSON})"
        f".property('valid_time', {RANGE_JSON})"
    )


def test_create_node_properties_sorted_and_compact():
    node = make_node(node_id=NODE_ID, now=FIXED, properties={"b": 2, "a": [1, "x"]})
    assert '.property(\'properties\', {"a":[1,"x"],"b":2})' in query.create_node(node)


def test_create_node_unserialisable_property():
    node = make_node(properties={"bad": object()})
    with pytest.raises(GraphError) as info:
        query.create_node(node)
    assert info.value.kind is ErrorKind.SERIALIZATION


def test_update_node_exact():
    node = make_node(node_id=NODE_ID, now=FIXED)
    assert query.update_node(node) == (
        f"g.V('{NODE_ID}')"
        ".property('label', \"test_node\")"
        ".property('properties', {})"
        f".property('transaction_time', {RANGE_JSON})"
        f".property('valid_time', {RANGE_JSON})"
    )


def test_create_edge_exact():
    edge = Edge(
        id=EDGE_ID,
        source_id=SOURCE_ID,
        target_id=TARGET_ID,
        label="WORKS_AT",
        valid_time=TemporalRange(start=FIXED),
        transaction_time=TemporalRange(start=FIXED),
    )
    assert query.create_edge(edge) == (
        f"g.V('{SOURCE_ID}').addE('WORKS_AT').to(V('{TARGET_ID}'))"
        f".property('id', \"{EDGE_ID}\")"
        ".property('properties', {})"
        f".property('transaction_time', {RANGE_JSON})"
        f".property('valid_time', {RANGE_JSON})"
    )


def test_update_edge_exact():
    edge = Edge(
        id=EDGE_ID,
        source_id=SOURCE_ID,
        target_id=TARGET_ID,
        label="WORKS_AT",
        properties={"role": "Engineer"},
        valid_time=TemporalRange(start=FIXED),
        transaction_time=TemporalRange(start=FIXED),
    )
    assert query.update_edge(edge) == (
        f"g.E('{EDGE_ID}')"
        '.property(\'properties\', {"role":"Engineer"})'
        f".property('transaction_time', {RANGE_JSON})"
        f".property('valid_time', {RANGE_JSON})"
    )


def test_simple_lookups():
    assert query.get_node(NODE_ID) == f"g.V('{NODE_ID}').hasLabel('node')"
    assert query.delete_node(NODE_ID) == f"g.V('{NODE_ID}').drop()"
    assert query.get_edge(EDGE_ID) == f"g.E('{EDGE_ID}').hasLabel('edge')"
    assert query.delete_edge(EDGE_ID) == f"g.E('{EDGE_ID}').drop()"
    assert query.get_nodes_by_label("Person") == "g.V().hasLabel('Person')"
    assert query.get_edges_by_label("KNOWS") == "g.E().hasLabel('KNOWS')"
    assert query.get_edges_from(SOURCE_ID) == f"g.V('{SOURCE_ID}').outE()"
    assert query.get_edges_to(TARGET_ID) == f"g.V('{TARGET_ID}').inE()"
    assert query.get_vertex("abc") == "g.V('abc')"


def test_get_edges_between():
    assert query.get_edges_between(SOURCE_ID, TARGET_ID) == (
        f"g.V('{SOURCE_ID}').outE().where(inV().hasId('{TARGET_ID}'))"
    )


def test_temporal_filters_exact():
    time_range = TemporalRange(start=FIXED, end=FIXED + timedelta(hours=1))
    assert query.get_edges_for_node(NODE_ID, time_range) == (
        f"g.V('{NODE_ID}').bothE()"
        ".has('valid_time.start', gte(1704067200))"
        ".has('valid_time.end', lte(1704070800))"
    )


def test_without_range_no_filters():
    assert query.get_edges_for_node(NODE_ID, None) == f"g.V('{NODE_ID}').bothE()"
    assert query.get_connected_nodes(NODE_ID, None) == f"g.V('{NODE_ID}').both()"


def test_connected_nodes_start_only():
    time_range = TemporalRange(start=FIXED)
    assert query.get_connected_nodes(NODE_ID, time_range) == (
        f"g.V('{NODE_ID}').both().has('valid_time.start', gte(1704067200))"
    )


def test_unbounded_range_adds_nothing():
    assert query.get_connected_nodes(NODE_ID, TemporalRange.unbounded()) == (
        f"g.V('{NODE_ID}').both()"
    )