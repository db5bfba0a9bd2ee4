"""Liveness check.

The store is process-local, so there are no external dependencies to
probe; the response reports collection sizes instead.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.bizstudio.api.deps import get_app_settings, get_services
from src.bizstudio.config import Settings
from src.bizstudio.services.registry import Services

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    services: Services = Depends(get_services),
    settings: Settings = Depends(get_app_settings),
):
    """Basic liveness check with per-collection record counts."""
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT.value,
        "collections": services.store.sizes(),
    }
