"""Error types for the temporal knowledge graph and its HTTP API."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Any


class ErrorKind(Enum):
    """Category of a core graph error; the value is its display prefix key."""

    IO = "io"
    OPENSEARCH = "opensearch"
    NEPTUNE = "neptune"
    DYNAMODB = "dynamodb"
    SERIALIZATION = "serialization"
    PARSE = "parse"
    VALUE_CONVERSION = "value_conversion"
    INVALID_TEMPORAL_RANGE = "invalid_temporal_range"
    ENTITY_NOT_FOUND = "entity_not_found"
    INVALID_DATA_FORMAT = "invalid_data_format"
    OPERATION_FAILED = "operation_failed"
    DATABASE_ERROR = "database_error"
    GREMLIN = "gremlin"
    JSON = "json"
    UUID = "uuid"
    BACKOFF = "backoff"
    NODE_NOT_FOUND = "node_not_found"
    EDGE_NOT_FOUND = "edge_not_found"
    CONNECTION_POOL = "connection_pool"
    RETRY = "retry"
    TEMPORAL_OVERLAP = "temporal_overlap"
    VERSION_NOT_FOUND = "version_not_found"
    INVALID_TEMPORAL_OPERATION = "invalid_temporal_operation"
    TEMPORAL_CONSISTENCY_VIOLATION = "temporal_consistency_violation"
    TRANSACTION_TIME_INCONSISTENCY = "transaction_time_inconsistency"
    AWS_ERROR = "aws_error"
    CONFIGURATION_ERROR = "configuration_error"
    VALIDATION_ERROR = "validation_error"
    INTERNAL_ERROR = "internal_error"
    NEPTUNE_CONNECTION = "neptune_connection"
    NEPTUNE_QUERY = "neptune_query"
    NEPTUNE_RESPONSE_PARSING = "neptune_response_parsing"
    NEPTUNE_TRANSACTION = "neptune_transaction"
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"
    INVALID_ENTITY_TYPE = "invalid_entity_type"
    INVALID_DATA_TYPE = "invalid_data_type"
    OTHER = "other"
    MODEL_ERROR = "model_error"
    INTERNAL = "internal"
    INVALID_INPUT = "invalid_input"
    INVALID_QUERY_FORMAT = "invalid_query_format"
    DESERIALIZATION = "deserialization"
    CONNECTION = "connection"
    NOT_IMPLEMENTED = "not_implemented"

    @property
    def prefix(self) -> str:
        """Human-readable prefix used when the error is displayed."""
        return _PREFIXES[self]


_PREFIXES: dict[ErrorKind, str] = {
    ErrorKind.IO: "IO error",
    ErrorKind.OPENSEARCH: "OpenSearch error",
    ErrorKind.NEPTUNE: "Neptune error",
    ErrorKind.DYNAMODB: "DynamoDB error",
    ErrorKind.SERIALIZATION: "Serialization error",
    ErrorKind.PARSE: "Parse error",
    ErrorKind.VALUE_CONVERSION: "Value conversion error",
    ErrorKind.INVALID_TEMPORAL_RANGE: "Invalid temporal range",
    ErrorKind.ENTITY_NOT_FOUND: "Entity not found",
    ErrorKind.INVALID_DATA_FORMAT: "Invalid data format",
    ErrorKind.OPERATION_FAILED: "Operation failed",
    ErrorKind.DATABASE_ERROR: "Database error",
    ErrorKind.GREMLIN: "Gremlin error",
    ErrorKind.JSON: "JSON error",
    ErrorKind.UUID: "UUID error",
    ErrorKind.BACKOFF: "Backoff error",
    ErrorKind.NODE_NOT_FOUND: "Node not found",
    ErrorKind.EDGE_NOT_FOUND: "Edge not found",
    ErrorKind.CONNECTION_POOL: "Connection pool error",
    ErrorKind.RETRY: "Retry error",
    ErrorKind.TEMPORAL_OVERLAP: "Temporal overlap detected",
    ErrorKind.VERSION_NOT_FOUND: "Version not found",
    ErrorKind.INVALID_TEMPORAL_OPERATION: "Invalid temporal operation",
    ErrorKind.TEMPORAL_CONSISTENCY_VIOLATION: "Temporal consistency violation",
    ErrorKind.TRANSACTION_TIME_INCONSISTENCY: "Transaction time inconsistency",
    ErrorKind.AWS_ERROR: "AWS error",
    ErrorKind.CONFIGURATION_ERROR: "Configuration error",
    ErrorKind.VALIDATION_ERROR: "Validation error",
    ErrorKind.INTERNAL_ERROR: "Internal error",
    ErrorKind.NEPTUNE_CONNECTION: "Neptune connection error",
    ErrorKind.NEPTUNE_QUERY: "Neptune query error",
    ErrorKind.NEPTUNE_RESPONSE_PARSING: "Neptune response parsing error",
    ErrorKind.NEPTUNE_TRANSACTION: "Neptune transaction error",
    ErrorKind.INVALID_ID: "Invalid ID",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.INVALID_ENTITY_TYPE: "Invalid entity type",
    ErrorKind.INVALID_DATA_TYPE: "Invalid data type",
    ErrorKind.OTHER: "Other error",
    ErrorKind.MODEL_ERROR: "Model error",
    ErrorKind.INTERNAL: "Internal error",
    ErrorKind.INVALID_INPUT: "Invalid input",
    ErrorKind.INVALID_QUERY_FORMAT: "Invalid query format",
    ErrorKind.DESERIALIZATION: "Deserialization error",
    ErrorKind.CONNECTION: "Connection error",
    ErrorKind.NOT_IMPLEMENTED: "Not implemented",
}


class GraphError(Exception):
    """Error raised by the graph, storage and configuration layers."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.prefix}: {self.message}"

    def __repr__(self) -> str:
        return f"GraphError({self.kind.name}, {self.message!r})"


def from_backoff(message: str, permanent: bool) -> GraphError:
    """Build the error that a failed retry loop reports."""
    if permanent:
        return GraphError(ErrorKind.BACKOFF, message)
    return GraphError(ErrorKind.RETRY, f"Transient error: {message}")


class ApiErrorKind(Enum):
    """Category of an API error."""

    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    INTERNAL = "internal"
    CORE = "core"

    @property
    def status(self) -> HTTPStatus:
        """HTTP status reported for this kind of error."""
        return _API_STATUS[self]


_API_STATUS: dict[ApiErrorKind, HTTPStatus] = {
    ApiErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ApiErrorKind.BAD_REQUEST: HTTPStatus.BAD_REQUEST,
    ApiErrorKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ApiErrorKind.RATE_LIMIT_EXCEEDED: HTTPStatus.TOO_MANY_REQUESTS,
    ApiErrorKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
    ApiErrorKind.CORE: HTTPStatus.INTERNAL_SERVER_ERROR,
}

_API_PREFIXES: dict[ApiErrorKind, str] = {
    ApiErrorKind.NOT_FOUND: "Not found",
    ApiErrorKind.BAD_REQUEST: "Bad request",
    ApiErrorKind.UNAUTHORIZED: "Unauthorized",
    ApiErrorKind.RATE_LIMIT_EXCEEDED: "Rate limit exceeded",
    ApiErrorKind.INTERNAL: "Internal error",
}


class ApiError(Exception):
    """Error returned by an API handler.

    For ``ApiErrorKind.CORE`` the detail is the wrapped ``GraphError`` and the
    error displays exactly as that error does.
    """

    def __init__(self, kind: ApiErrorKind, detail: str | GraphError) -> None:
        if kind is ApiErrorKind.CORE and not isinstance(detail, GraphError):
            raise TypeError("a core API error wraps a GraphError")
        super().__init__(detail)
        self.kind = kind
        self.detail = detail

    @property
    def status_code(self) -> int:
        return int(self.kind.status)

    @property
    def message(self) -> str:
        """The message placed in the response body."""
        return str(self.detail)

    def __str__(self) -> str:
        if self.kind is ApiErrorKind.CORE:
            return str(self.detail)
        return f"{_API_PREFIXES[self.kind]}: {self.detail}"

    def to_response(self) -> tuple[int, dict[str, Any]]:
        """Return the HTTP status code and JSON body for this error."""
        code = self.status_code
        return code, {"error": {"message": self.message, "code": code}}