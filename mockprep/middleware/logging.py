from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("mockprep.request")


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    # Lost slot races and throttled bookings.
    if status_code in (409, 429):
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        fields = {"method": request.method, "path": request.url.path}
        try:
            response = await call_next(request)
        except Exception:
            fields["request_id"] = getattr(request.state, "request_id", None)
            fields["duration_ms"] = int((time.perf_counter() - start) * 1000)
            logger.exception("request_failed", extra=fields)
            raise

        fields["request_id"] = getattr(request.state, "request_id", None)
        fields["status_code"] = response.status_code
        fields["duration_ms"] = int((time.perf_counter() - start) * 1000)
        logger.log(_level_for(response.status_code), "request_completed", extra=fields)
        return response
