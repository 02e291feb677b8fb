"""Core graph value types: entity types, temporal ranges, nodes and edges."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar
from uuid import UUID

from temporal_kg.errors import ErrorKind, GraphError

_TIMESTAMP = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})$"
)


def _format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        match = _TIMESTAMP.match(value)
        if match is None:
            raise GraphError(ErrorKind.SERIALIZATION, f"invalid timestamp: {value!r}")
        fraction = (match["fraction"] or "").ljust(6, "0")[:6]
        offset = "+00:00" if match["offset"] == "Z" else match["offset"]
        try:
            moment = datetime.fromisoformat(f"{match['base']}.{fraction}{offset}")
        except ValueError as exc:
            raise GraphError(ErrorKind.SERIALIZATION, f"invalid timestamp: {value!r}") from exc
    else:
        raise GraphError(ErrorKind.SERIALIZATION, f"invalid timestamp: {value!r}")
    if moment.tzinfo is None:
        raise GraphError(ErrorKind.SERIALIZATION, f"timestamp has no offset: {value!r}")
    return moment.astimezone(timezone.utc)


def _parse_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        raise GraphError(ErrorKind.SERIALIZATION, f"expected a UUID string, got {value!r}")
    try:
        return UUID(value)
    except ValueError as exc:
        raise GraphError(ErrorKind.UUID, f"invalid UUID: {value!r}") from exc


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, Mapping):
        raise GraphError(ErrorKind.SERIALIZATION, "expected a JSON object")
    try:
        return data[key]
    except KeyError:
        raise GraphError(ErrorKind.SERIALIZATION, f"missing field `{key}`") from None


def _require_str(data: Any, key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise GraphError(ErrorKind.SERIALIZATION, f"field `{key}` must be a string")
    return value


def _require_properties(data: Any) -> dict[str, Any]:
    value = _require(data, "properties")
    if not isinstance(value, Mapping):
        raise GraphError(ErrorKind.SERIALIZATION, "field `properties` must be an object")
    return dict(value)


@dataclass(frozen=True)
class EntityType:
    """Kind of entity a node represents; names outside the built-ins are custom."""

    name: str

    PERSON: ClassVar[EntityType]
    ORGANIZATION: ClassVar[EntityType]
    LOCATION: ClassVar[EntityType]
    EVENT: ClassVar[EntityType]
    TOPIC: ClassVar[EntityType]
    DOCUMENT: ClassVar[EntityType]
    VERTEX: ClassVar[EntityType]
    NODE: ClassVar[EntityType]
    PRODUCT: ClassVar[EntityType]

    @classmethod
    def parse(cls, text: str) -> EntityType:
        """Entity type named by ``text``; unknown names become custom types."""
        if not isinstance(text, str):
            raise GraphError(ErrorKind.NEPTUNE, "Invalid entity_type format")
        return cls(text)

    @property
    def is_custom(self) -> bool:
        return self.name not in _BUILTIN_NAMES

    def __str__(self) -> str:
        return self.name


_BUILTIN_NAMES = frozenset(
    {
        "Person",
        "Organization",
        "Location",
        "Event",
        "Topic",
        "Document",
        "Vertex",
        "Node",
        "Product",
    }
)

EntityType.PERSON = EntityType("Person")
EntityType.ORGANIZATION = EntityType("Organization")
EntityType.LOCATION = EntityType("Location")
EntityType.EVENT = EntityType("Event")
EntityType.TOPIC = EntityType("Topic")
EntityType.DOCUMENT = EntityType("Document")
EntityType.VERTEX = EntityType("Vertex")
EntityType.NODE = EntityType("Node")
EntityType.PRODUCT = EntityType("Product")


@dataclass(frozen=True)
class TemporalRange:
    """A possibly open-ended span of time, stored in UTC."""

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            moment = getattr(self, name)
            if moment is None:
                continue
            if moment.tzinfo is None:
                raise GraphError(
                    ErrorKind.INVALID_DATA_FORMAT, "timestamps must be timezone-aware"
                )
            object.__setattr__(self, name, moment.astimezone(timezone.utc))

    @classmethod
    def from_now(cls) -> TemporalRange:
        """Range starting now with no end."""
        return cls(start=datetime.now(timezone.utc), end=None)

    @classmethod
    def unbounded(cls) -> TemporalRange:
        """Range open at both ends."""
        return cls(start=None, end=None)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "start": None if self.start is None else _format_timestamp(self.start),
            "end": None if self.end is None else _format_timestamp(self.end),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TemporalRange:
        if not isinstance(data, Mapping):
            raise GraphError(ErrorKind.SERIALIZATION, "temporal range must be an object")
        start = data.get("start")
        end = data.get("end")
        return cls(
            start=None if start is None else _parse_timestamp(start),
            end=None if end is None else _parse_timestamp(end),
        )


def validate_temporal_range(time_range: TemporalRange) -> None:
    """Raise if the range starts after it ends."""
    if (
        time_range.start is not None
        and time_range.end is not None
        and time_range.start > time_range.end
    ):
        raise GraphError(
            ErrorKind.INVALID_TEMPORAL_RANGE, "Start time must be before end time"
        )


@dataclass
class Node:
    """A vertex of the graph with bitemporal validity."""

    id: UUID
    entity_type: EntityType
    label: str
    valid_time: TemporalRange
    transaction_time: TemporalRange
    properties: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "entity_type": str(self.entity_type),
            "label": self.label,
            "properties": dict(self.properties),
            "valid_time": self.valid_time.to_dict(),
            "transaction_time": self.transaction_time.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Node:
        return cls(
            id=_parse_uuid(_require(data, "id")),
            entity_type=EntityType.parse(_require_str(data, "entity_type")),
            label=_require_str(data, "label"),
            properties=_require_properties(data),
            valid_time=TemporalRange.from_dict(_require(data, "valid_time")),
            transaction_time=TemporalRange.from_dict(_require(data, "transaction_time")),
        )


@dataclass
class Edge:
    """A directed, labelled relationship between two nodes."""

    id: UUID
    source_id: UUID
    target_id: UUID
    label: str
    valid_time: TemporalRange
    transaction_time: TemporalRange
    properties: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "source_id": str(self.source_id),
            "target_id": str(self.target_id),
            "label": self.label,
            "properties": dict(self.properties),
            "valid_time": self.valid_time.to_dict(),
            "transaction_time": self.transaction_time.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Edge:
        return cls(
            id=_parse_uuid(_require(data, "id")),
            source_id=_parse_uuid(_require(data, "source_id")),
            target_id=_parse_uuid(_require(data, "target_id")),
            label=_require_str(data, "label"),
            properties=_require_properties(data),
            valid_time=TemporalRange.from_dict(_require(data, "valid_time")),
            transaction_time=TemporalRange.from_dict(_require(data, "transaction_time")),
        )