"""REST API endpoints for monthly revenue projections."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from src.bizstudio.api.deps import get_actor, get_services
from src.bizstudio.audit.recorder import Actor
from src.bizstudio.core.validation import validate_payload
from src.bizstudio.schemas.sales import (
    MONTH_PATTERN,
    RevenueProjection,
    RevenueProjectionCreate,
    RevenueProjectionUpdate,
)
from src.bizstudio.services.registry import Services

router = APIRouter(prefix="/revenue-projections", tags=["revenue"])


@router.get("", response_model=list[RevenueProjection])
async def list_revenue_projections(
    start_month: str | None = Query(default=None, alias="startMonth", pattern=MONTH_PATTERN),
    end_month: str | None = Query(default=None, alias="endMonth", pattern=MONTH_PATTERN),
    services: Services = Depends(get_services),
) -> list[RevenueProjection]:
    """All projections, or those within [startMonth, endMonth] when both are given."""
    if start_month and end_month:
        return services.store.revenue_projections.by_month_range(start_month, end_month)
    return services.revenue_projections.list_all()


@router.get("/{projection_id}", response_model=RevenueProjection)
async def get_revenue_projection(
    projection_id: str,
    services: Services = Depends(get_services),
) -> RevenueProjection:
    return services.revenue_projections.get(projection_id)


@router.post("", response_model=RevenueProjection, status_code=status.HTTP_201_CREATED)
async def create_revenue_projection(
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> RevenueProjection:
    data = validate_payload(RevenueProjectionCreate, payload)
    return services.revenue_projections.create(data, actor)


@router.patch("/{projection_id}", response_model=RevenueProjection)
async def update_revenue_projection(
    projection_id: str,
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> RevenueProjection:
    services.revenue_projections.get(projection_id)
    patch = validate_payload(RevenueProjectionUpdate, payload)
    return services.revenue_projections.update(projection_id, patch, actor)


@router.delete(
    "/{projection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_revenue_projection(
    projection_id: str,
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Response:
    services.revenue_projections.delete(projection_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
