"""REST API endpoints for app-builder users.

Email addresses are unique across users (case-insensitive); a clash is a
400 on the ``email`` field.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from src.bizstudio.api.deps import get_actor, get_services
from src.bizstudio.audit.recorder import Actor
from src.bizstudio.core.validation import validate_payload
from src.bizstudio.schemas.builder import User, UserCreate, UserUpdate
from src.bizstudio.services.registry import Services

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[User])
async def list_users(services: Services = Depends(get_services)) -> list[User]:
    return services.users.list_all()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, services: Services = Depends(get_services)) -> User:
    return services.users.get(user_id)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> User:
    data = validate_payload(UserCreate, payload)
    return services.users.create(data, actor)


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> User:
    services.users.get(user_id)
    patch = validate_payload(UserUpdate, payload)
    return services.users.update(user_id, patch, actor)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(
    user_id: str,
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Response:
    services.users.delete(user_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
