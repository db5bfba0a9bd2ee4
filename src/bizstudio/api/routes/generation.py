"""Code generation endpoint and generation history.

POST /generate awaits the configured CodeGenerator. While it runs the event
loop keeps serving other requests.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from src.bizstudio.api.deps import get_actor, get_services
from src.bizstudio.audit.recorder import Actor
from src.bizstudio.core.errors import NotFoundError
from src.bizstudio.core.validation import validate_payload
from src.bizstudio.schemas.builder import GeneratedProject, GenerateRequest, GenerationHistory
from src.bizstudio.services.registry import Services

router = APIRouter(tags=["generation"])


@router.post("/generate", response_model=GeneratedProject)
async def generate_project(
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> GeneratedProject:
    """Generate frontend/backend code for a natural-language prompt.

    When both ``projectName`` and ``userId`` are supplied the result is also
    saved as a completed Project.
    """
    request = validate_payload(GenerateRequest, payload)
    return await services.generation.generate(request, actor)


@router.get("/generation-history", response_model=list[GenerationHistory])
async def list_generation_history(
    user_id: str | None = Query(default=None, alias="userId"),
    project_id: str | None = Query(default=None, alias="projectId"),
    services: Services = Depends(get_services),
) -> list[GenerationHistory]:
    history = services.store.generation_history
    if user_id:
        return history.by_user(user_id)
    if project_id:
        return history.by_project(project_id)
    return history.get_all()


@router.get("/generation-history/{history_id}", response_model=GenerationHistory)
async def get_generation_history(
    history_id: str,
    services: Services = Depends(get_services),
) -> GenerationHistory:
    entry = services.store.generation_history.get_by_id(history_id)
    if entry is None:
        raise NotFoundError("GenerationHistory", history_id)
    return entry
