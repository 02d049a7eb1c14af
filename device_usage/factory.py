from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from device_usage.api.errors import request_validation_handler
from device_usage.api.router import api_router
from device_usage.clients.posts import PostsClient
from device_usage.core.config import Settings, load_settings
from device_usage.core.logging_config import configure_logging
from device_usage.db.engine import create_engine, create_schema

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.engine = create_engine(settings)
        await create_schema(app.state.engine)
        app.state.posts_client = PostsClient(
            user_agent=settings.posts_user_agent,
            timeout_seconds=settings.posts_timeout_seconds,
            url=str(settings.posts_url),
        )
        logger.info("Device usage service started")
        try:
            yield
        finally:
            await app.state.posts_client.aclose()
            await app.state.engine.dispose()
            logger.info("Device usage service stopped")

    docs_enabled = settings.docs_enabled and not settings.is_production
    app = FastAPI(
        title="Device Usage API",
        version="0.1.0",
        debug=settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if settings.is_production:
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/", tags=["meta"])
    def root():
        return {"name": "device-usage-service", "status": "ok"}

    app.include_router(api_router)
    return app
