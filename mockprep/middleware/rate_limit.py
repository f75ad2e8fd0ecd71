from __future__ import annotations

import math
import time
from collections import deque
from typing import Deque

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware


def _client_ip(request: Request) -> str:
    forwarded = (request.headers.get("x-forwarded-for") or "").split(",")[0].strip()
    if forwarded:
        return forwarded
    real_ip = (request.headers.get("x-real-ip") or "").strip()
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


class SlidingWindow:
    def __init__(self, limit: int, window_seconds: int) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._hits: dict[str, Deque[float]] = {}
        self._last_sweep = 0.0

    def _drain(self, key: str, cutoff: float) -> Deque[float] | None:
        hits = self._hits.get(key)
        if hits is None:
            return None
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if not hits:
            del self._hits[key]
            return None
        return hits

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        cutoff = now - self.window_seconds
        for key in list(self._hits):
            self._drain(key, cutoff)

    def retry_after(self, key: str, now: float) -> int:
        """Seconds until ``key`` may try again; 0 records the hit and lets it through."""
        self._sweep(now)
        hits = self._drain(key, now - self.window_seconds)
        if hits is not None and len(hits) >= self.limit:
            return max(1, math.ceil(hits[0] + self.window_seconds - now))
        self._hits.setdefault(key, deque()).append(now)
        return 0

    def __len__(self) -> int:
        return len(self._hits)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Throttle booking writes so one caller cannot sweep a day's slots."""

    def __init__(
        self,
        app,
        *,
        limit: int,
        window_seconds: int,
        path_prefixes: tuple[str, ...] = ("/interviews/schedule",),
        methods: tuple[str, ...] = ("POST",),
    ) -> None:
        super().__init__(app)
        self.window = SlidingWindow(limit, window_seconds)
        self.path_prefixes = path_prefixes
        self.methods = methods

    async def dispatch(self, request: Request, call_next):
        if request.method not in self.methods or not request.url.path.startswith(self.path_prefixes):
            return await call_next(request)

        wait = self.window.retry_after(_client_ip(request), time.monotonic())
        if wait:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": "Too many booking attempts. Please retry shortly.", "code": "rate_limited"},
                headers={"Retry-After": str(wait)},
            )
        return await call_next(request)
