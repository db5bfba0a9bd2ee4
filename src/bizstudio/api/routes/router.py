"""API router -- aggregates all /api endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from src.bizstudio.api.routes import (
    analytics,
    audit,
    deals,
    generation,
    projects,
    revenue,
    templates,
    users,
)

router = APIRouter(prefix="/api")

router.include_router(deals.router)
router.include_router(revenue.router)
router.include_router(audit.router)
router.include_router(analytics.router)
router.include_router(users.router)
router.include_router(projects.router)
router.include_router(templates.router)
router.include_router(generation.router)
