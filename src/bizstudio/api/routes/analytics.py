"""Pipeline and revenue analytics endpoints (computed on every request)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.bizstudio.api.deps import get_services
from src.bizstudio.schemas.analytics import PipelineSummary, RevenueForecast
from src.bizstudio.services.registry import Services

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/pipeline-summary", response_model=PipelineSummary)
async def pipeline_summary(services: Services = Depends(get_services)) -> PipelineSummary:
    return services.analytics.pipeline_summary()


@router.get("/revenue-forecast", response_model=RevenueForecast)
async def revenue_forecast(services: Services = Depends(get_services)) -> RevenueForecast:
    return services.analytics.revenue_forecast()
