"""The HTTP application: shared state and route wiring."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from temporal_kg import handlers
from temporal_kg.errors import ApiError
from temporal_kg.models import HealthCheckResponse, VersionInfo

logger = logging.getLogger(__name__)

TITLE = "Temporal Knowledge Graph API"
DESCRIPTION = (
    "API for managing a temporal knowledge graph with dynamic memory capabilities"
)
TAGS = [
    {"name": "health", "description": "Health and version endpoints"},
    {"name": "nodes", "description": "Node management endpoints"},
    {"name": "edges", "description": "Edge management endpoints"},
    {"name": "knowledge", "description": "Knowledge graph operations"},
]


class ApiState:
    """State shared by all handlers."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._start = clock()

    def uptime(self) -> timedelta:
        """Time elapsed since the state was created."""
        return timedelta(seconds=self._clock() - self._start)


def create_app(state: ApiState | None = None) -> FastAPI:
    """Build the application with health routes, API docs and request logging."""
    api_state = state if state is not None else ApiState()
    app = FastAPI(
        title=TITLE,
        description=DESCRIPTION,
        version=handlers.VERSION,
        openapi_tags=TAGS,
        docs_url="/swagger-ui",
        openapi_url="/api-docs/openapi.json",
        redoc_url=None,
    )
    app.state.api = api_state

    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
        status, body = exc.to_response()
        return JSONResponse(status_code=status, content=body)

    @app.middleware("http")
    async def _request_logger(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        latency = time.perf_counter() - started
        logger.info(
            "Request method=%s path=%s status=%d latency=%.6fs",
            request.method,
            request.url.path,
            response.status_code,
            latency,
        )
        return response

    @app.get("/health", tags=["health"], response_model=HealthCheckResponse)
    def health() -> HealthCheckResponse:
        return handlers.health_check(api_state)

    @app.get("/version", tags=["health"], response_model=VersionInfo)
    def version() -> VersionInfo:
        return handlers.version()

    return app