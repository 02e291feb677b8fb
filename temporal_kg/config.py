"""Application configuration and shared context."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, TypeVar

from temporal_kg.errors import ErrorKind, GraphError

_T = TypeVar("_T")

_U16_MAX = 2**16 - 1
_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1


def _clean(text: str) -> str:
    if text != text.strip() or "_" in text:
        raise ValueError(text)
    return text


def _unsigned(limit: int) -> Callable[[str], int]:
    def parse(text: str) -> int:
        value = int(_clean(text), 10)
        if not 0 <= value <= limit:
            raise ValueError(text)
        return value

    return parse


def _boolean(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(text)


def _number(text: str) -> float:
    return float(_clean(text))


@dataclass
class Config:
    """Service endpoints, pool limits and extraction settings."""

    aws_region: str = "us-east-1"
    neptune_endpoint: str = "localhost"
    neptune_port: int = 8182
    neptune_iam_auth: bool = False
    opensearch_endpoint: str = "http://localhost:9200"
    dynamodb_table: str = "graph-table"
    temporal_table: str = "graph-temporal-table"
    s3_bucket: str = "graph-bucket"
    sqs_queue_url: str = "http://localhost:4566/000000000000/graph-queue"
    memory_url: str = "http://localhost:9200"
    memory_username: str = ""
    memory_password: str = ""
    max_retries: int = 3
    connection_timeout: int = 30
    max_connections: int = 50
    entity_extraction_confidence: float = 0.7
    relationship_detection_confidence: float = 0.7
    max_context_window: int = 512
    batch_size: int = 32
    memory_size: int = 384

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Read the configuration from environment variables.

        Required variables raise ``GraphError`` when absent; optional ones fall
        back to their defaults when absent or unparsable.
        """
        env = os.environ if environ is None else environ

        def required(name: str) -> str:
            try:
                return env[name]
            except KeyError:
                raise GraphError(
                    ErrorKind.CONFIGURATION_ERROR,
                    f"environment variable {name} is not set",
                ) from None

        def optional(name: str, parse: Callable[[str], _T], default: _T) -> _T:
            text = env.get(name)
            if text is None:
                return default
            try:
                return parse(text)
            except ValueError:
                return default

        return cls(
            aws_region=required("AWS_REGION"),
            neptune_endpoint=required("NEPTUNE_ENDPOINT"),
            neptune_port=optional("NEPTUNE_PORT", _unsigned(_U16_MAX), 8182),
            neptune_iam_auth=optional("NEPTUNE_IAM_AUTH", _boolean, False),
            opensearch_endpoint=required("OPENSEARCH_ENDPOINT"),
            dynamodb_table=required("DYNAMODB_TABLE"),
            temporal_table=required("TEMPORAL_TABLE"),
            s3_bucket=required("S3_BUCKET"),
            sqs_queue_url=required("SQS_QUEUE_URL"),
            memory_url=required("MEMORY_URL"),
            memory_username=env.get("MEMORY_USERNAME", ""),
            memory_password=env.get("MEMORY_PASSWORD", ""),
            max_retries=optional("MAX_RETRIES", _unsigned(_U32_MAX), 3),
            connection_timeout=optional("CONNECTION_TIMEOUT", _unsigned(_U32_MAX), 30),
            max_connections=optional("MAX_CONNECTIONS", _unsigned(_U32_MAX), 100),
            entity_extraction_confidence=optional(
                "ENTITY_EXTRACTION_CONFIDENCE", _number, 0.7
            ),
            relationship_detection_confidence=optional(
                "RELATIONSHIP_DETECTION_CONFIDENCE", _number, 0.7
            ),
            max_context_window=optional("MAX_CONTEXT_WINDOW", _unsigned(_USIZE_MAX), 512),
            batch_size=optional("BATCH_SIZE", _unsigned(_USIZE_MAX), 32),
            memory_size=optional("MEMORY_SIZE", _unsigned(_USIZE_MAX), 384),
        )

    @classmethod
    def for_testing(cls) -> Config:
        """Configuration pointing at local test services."""
        return cls(
            dynamodb_table="test-table",
            temporal_table="test-temporal-table",
            s3_bucket="test-bucket",
            sqs_queue_url="http://localhost:4566/000000000000/test-queue",
            connection_timeout=5,
            max_connections=10,
        )

    @classmethod
    def new(
        cls, neptune_endpoint: str, max_connections: int, connection_timeout: int
    ) -> Config:
        """Default configuration with custom Neptune connection settings."""
        return cls(
            neptune_endpoint=neptune_endpoint,
            max_connections=max_connections,
            connection_timeout=connection_timeout,
        )


@dataclass(frozen=True)
class Context:
    """Application context holding the shared configuration."""

    config: Config