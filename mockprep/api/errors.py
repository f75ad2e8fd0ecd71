from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mockprep.core.errors import SchedulingError, StoreUnavailableError

logger = logging.getLogger("mockprep.errors")


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SchedulingError)
    async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
        log = logger.error if isinstance(exc, StoreUnavailableError) else logger.info
        log(
            "scheduling_error",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "code": exc.code,
                "details": exc.details,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code, "details": exc.details},
        )
