"""Authentication and rate limiting helpers for the HTTP API."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable

API_TOKEN = "token"
_BEARER = "Bearer "


def check_bearer_token(authorization: str | None) -> bool:
    """Whether an Authorization header carries the expected bearer token."""
    if authorization is None or not authorization.startswith(_BEARER):
        return False
    return authorization[len(_BEARER):] == API_TOKEN


@dataclass
class _Bucket:
    count: int
    started: float


class RateLimiter:
    """Fixed-window request counter keyed by client address."""

    def __init__(
        self,
        max_requests: int,
        window: float | timedelta,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window = window.total_seconds() if isinstance(window, timedelta) else float(window)
        self._clock = clock
        self._buckets: dict[str, _Bucket] = {}
        self._lock = threading.Lock()

    def check(self, client_ip: str) -> bool:
        """Record a request from ``client_ip``; False means it must be refused."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(client_ip)
            if bucket is None:
                self._buckets[client_ip] = _Bucket(count=1, started=now)
                return True
            if now - bucket.started > self.window:
                bucket.count = 1
                bucket.started = now
                return True
            if bucket.count >= self.max_requests:
                return False
            bucket.count += 1
            return True