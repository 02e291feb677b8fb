"""Temporal knowledge graph: configuration, bitemporal graph types, Gremlin query strings, a FastAPI app skeleton and an HTTP client."""

__version__ = "0.1.0"

__all__ = [
    "app",
    "client",
    "config",
    "errors",
    "handlers",
    "middleware",
    "models",
    "query",
    "types",
]