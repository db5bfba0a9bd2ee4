"""REST API endpoints for generated projects."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from src.bizstudio.api.deps import get_actor, get_services
from src.bizstudio.audit.recorder import Actor
from src.bizstudio.core.validation import validate_payload
from src.bizstudio.schemas.builder import Project, ProjectCreate, ProjectStatus, ProjectUpdate
from src.bizstudio.services.registry import Services

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[Project])
async def list_projects(
    user_id: str | None = Query(default=None, alias="userId"),
    project_status: ProjectStatus | None = Query(default=None, alias="status"),
    services: Services = Depends(get_services),
) -> list[Project]:
    """All projects, or one user's projects, or projects in one status."""
    if user_id:
        return services.store.projects.by_user(user_id)
    if project_status is not None:
        return services.store.projects.by_status(project_status)
    return services.projects.list_all()


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: str, services: Services = Depends(get_services)) -> Project:
    return services.projects.get(project_id)


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Project:
    data = validate_payload(ProjectCreate, payload)
    return services.projects.create(data, actor)


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Project:
    services.projects.get(project_id)
    patch = validate_payload(ProjectUpdate, payload)
    return services.projects.update(project_id, patch, actor)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_project(
    project_id: str,
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Response:
    services.projects.delete(project_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
