"""Prometheus metrics and Sentry integration.

Provides:
- MetricsMiddleware: HTTP request count and duration per route
- audit_writes_total: audit recorder outcomes (recorded / failed)
- track_generation(): context manager for code-generation metrics
- init_sentry(): initialise Sentry when a DSN is configured
- get_metrics_response(): Prometheus exposition for /metrics
"""

from __future__ import annotations

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import sentry_sdk
from prometheus_client import REGISTRY, Counter, Histogram, generate_latest
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ── HTTP Metrics ─────────────────────────────────────────────────────────────

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ── Domain Metrics ───────────────────────────────────────────────────────────

audit_writes_total = Counter(
    "audit_writes_total",
    "Audit log writes by entity type and outcome",
    ["entity_type", "outcome"],
)

generation_requests_total = Counter(
    "generation_requests_total",
    "Code generation requests",
    ["generation_type", "status"],
)

generation_duration_seconds = Histogram(
    "generation_duration_seconds",
    "Code generation duration in seconds",
    ["generation_type"],
    buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)


# ── Metrics Middleware ───────────────────────────────────────────────────────


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records Prometheus metrics for every HTTP request.

    The endpoint label uses the matched route template (``/api/deals/{deal_id}``)
    when available, keeping label cardinality bounded.
    Skips the /metrics endpoint itself.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        route = request.scope.get("route")
        endpoint = getattr(route, "path", None) or request.url.path

        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=str(response.status_code),
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        return response


# ── Generation Metrics Helper ────────────────────────────────────────────────


@asynccontextmanager
async def track_generation(generation_type: str) -> AsyncGenerator[dict[str, Any], None]:
    """Context manager that tracks a code-generation call.

    Usage:
        async with track_generation("full-stack") as tracker:
            code = await generator.generate(request)

    The yielded dict receives ``duration_ms`` and ``status`` on exit.
    """
    tracker: dict[str, Any] = {"status": "completed", "duration_ms": 0.0}
    start_time = time.perf_counter()
    try:
        yield tracker
    except Exception:
        tracker["status"] = "failed"
        raise
    finally:
        duration = time.perf_counter() - start_time
        tracker["duration_ms"] = round(duration * 1000, 2)
        generation_requests_total.labels(
            generation_type=generation_type,
            status=tracker["status"],
        ).inc()
        generation_duration_seconds.labels(generation_type=generation_type).observe(duration)


# ── Sentry Integration ───────────────────────────────────────────────────────


def _before_send(event: dict, hint: dict) -> dict:
    """Tag Sentry events with the acting user and drop request bodies.

    Bodies carry client contact data (emails, names) and never leave the process.
    """
    request = event.get("request")
    if isinstance(request, dict):
        request.pop("data", None)
        headers = {k.lower(): v for k, v in (request.get("headers") or {}).items()}
        actor = headers.get("x-user-id")
        if actor:
            event.setdefault("tags", {})["actor"] = actor
    return event


def init_sentry(dsn: str, environment: str) -> None:
    """Initialize Sentry SDK.

    Args:
        dsn: Sentry DSN string.
        environment: Deployment environment (development, staging, production).
    """
    traces_sample_rate = 0.1 if environment == "production" else 1.0
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        integrations=[
            StarletteIntegration(),
            FastApiIntegration(),
        ],
        before_send=_before_send,
    )


# ── Metrics Endpoint ─────────────────────────────────────────────────────────


def get_metrics_response() -> Response:
    """Generate Prometheus exposition format response."""
    return Response(
        content=generate_latest(REGISTRY),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
