"""FastAPI application factory.

Creates the app with logging middleware, metrics middleware, CORS, Sentry,
the JSON error boundary, and the /api router. All state lives in one
in-memory Store built here and reachable through ``app.state.services``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import Response

from src.bizstudio.api.middleware.logging import LoggingMiddleware, configure_structlog
from src.bizstudio.api.routes import health
from src.bizstudio.api.routes.router import router as api_router
from src.bizstudio.config import Settings, get_settings
from src.bizstudio.core.errors import install_exception_handlers
from src.bizstudio.core.monitoring import MetricsMiddleware, get_metrics_response, init_sentry
from src.bizstudio.services.codegen import CodeGenerator
from src.bizstudio.services.registry import build_services
from src.bizstudio.store.memory import Store

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: logging and Sentry on startup."""
    settings: Settings = app.state.settings
    configure_structlog(settings)

    # Initialize Sentry if DSN is configured
    if settings.SENTRY_DSN:
        init_sentry(dsn=settings.SENTRY_DSN, environment=settings.ENVIRONMENT.value)

    log.info(
        "app.started",
        environment=settings.ENVIRONMENT.value,
        collections=app.state.services.store.sizes(),
    )
    yield
    log.info("app.shutdown")


def create_app(
    store: Store | None = None,
    settings: Settings | None = None,
    code_generator: CodeGenerator | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Store to serve from; a fresh empty one by default.
        settings: Overrides the environment-derived settings.
        code_generator: Replaces the mock generator (tests inject failures here).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="BizStudio API",
        version="0.1.0",
        description="Sales pipeline, audit trail and AI app-builder backend",
        lifespan=lifespan,
    )

    # Services are wired here rather than in lifespan so that in-process
    # ASGI clients, which skip lifespan events, still see them.
    app.state.settings = settings
    app.state.services = build_services(store or Store(), settings, code_generator)

    install_exception_handlers(app)

    # Middleware is added in reverse order (last added = outermost)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Logging middleware (logs every request with timing)
    app.add_middleware(LoggingMiddleware)

    # Metrics middleware (outermost -- records Prometheus metrics for all requests)
    app.add_middleware(MetricsMiddleware)

    app.include_router(health.router)
    app.include_router(api_router)

    # Prometheus metrics endpoint (infrastructure route, outside /api)
    @app.get("/metrics", include_in_schema=False)
    async def metrics(request: Request) -> Response:
        """Prometheus metrics endpoint."""
        return get_metrics_response()

    return app


# Module-level app for uvicorn
app = create_app()
