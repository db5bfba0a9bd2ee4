"""REST API endpoints for sales pipeline deals.

Bodies are accepted as raw JSON and run through validate_payload() so that
PATCH reports a missing deal (404) before looking at the body (400).
Every successful mutation is audited by the deal service.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from src.bizstudio.api.deps import get_actor, get_services
from src.bizstudio.audit.recorder import Actor
from src.bizstudio.core.validation import validate_payload
from src.bizstudio.schemas.sales import Deal, DealCreate, DealUpdate
from src.bizstudio.services.registry import Services

router = APIRouter(prefix="/deals", tags=["deals"])


@router.get("", response_model=list[Deal])
async def list_deals(
    stage: str | None = None,
    services: Services = Depends(get_services),
) -> list[Deal]:
    """All deals in creation order, optionally narrowed to one stage."""
    if stage:
        return services.store.deals.by_stage(stage)
    return services.deals.list_all()


@router.get("/stage/{stage}", response_model=list[Deal])
async def list_deals_by_stage(
    stage: str,
    services: Services = Depends(get_services),
) -> list[Deal]:
    return services.store.deals.by_stage(stage)


@router.get("/{deal_id}", response_model=Deal)
async def get_deal(deal_id: str, services: Services = Depends(get_services)) -> Deal:
    return services.deals.get(deal_id)


@router.post("", response_model=Deal, status_code=status.HTTP_201_CREATED)
async def create_deal(
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Deal:
    data = validate_payload(DealCreate, payload)
    return services.deals.create(data, actor)


@router.patch("/{deal_id}", response_model=Deal)
async def update_deal(
    deal_id: str,
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Deal:
    """Apply a partial update. Unknown deal wins over an invalid body."""
    services.deals.get(deal_id)
    patch = validate_payload(DealUpdate, payload)
    return services.deals.update(deal_id, patch, actor)


@router.delete(
    "/{deal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_deal(
    deal_id: str,
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Response:
    services.deals.delete(deal_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
