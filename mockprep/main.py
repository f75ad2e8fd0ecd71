from __future__ import annotations

import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from mockprep.api.errors import register_error_handlers
from mockprep.api.router import api_router
from mockprep.core.config import settings
from mockprep.db.session import init_models
from mockprep.middleware.internal_guard import InternalGuardMiddleware
from mockprep.middleware.logging import RequestLoggingMiddleware
from mockprep.middleware.rate_limit import RateLimitMiddleware
from mockprep.middleware.request_context import RequestContextMiddleware

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("mockprep")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        RateLimitMiddleware,
        limit=settings.schedule_rate_limit_per_min,
        window_seconds=settings.schedule_rate_limit_window_seconds,
        path_prefixes=("/interviews/schedule",),
    )
    app.add_middleware(
        InternalGuardMiddleware,
        api_key=settings.internal_api_key,
        allow_localhost=settings.internal_api_allow_localhost,
        protected_prefixes=("/internal",),
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "environment": settings.environment, "timezone": settings.schedule_timezone}

    app.include_router(api_router)

    @app.on_event("startup")
    async def _create_tables() -> None:
        await init_models()
        logger.info("models_ready", extra={"database": settings.database_url.split("://", 1)[0]})

    return app


app = create_app()
