"""REST API endpoints for the project template catalogue.

``?popular=N`` returns the N most popular templates. A value whose leading
digits do not give a positive number (``?popular=true``, ``?popular=0``)
falls back to the configured default limit. An empty ``?popular=`` is
ignored and lists every template.
"""

from __future__ import annotations

import re
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from src.bizstudio.api.deps import get_actor, get_app_settings, get_services
from src.bizstudio.audit.recorder import Actor
from src.bizstudio.config import Settings
from src.bizstudio.core.validation import validate_payload
from src.bizstudio.schemas.builder import Template, TemplateCreate, TemplateUpdate
from src.bizstudio.services.registry import Services

router = APIRouter(prefix="/templates", tags=["templates"])

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def popular_limit(raw: str, default: int) -> int:
    """Leading ASCII integer of ``raw`` if positive, else ``default``."""
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    limit = int(match.group(1))
    return limit if limit > 0 else default


@router.get("", response_model=list[Template])
async def list_templates(
    category: str | None = None,
    popular: str | None = None,
    services: Services = Depends(get_services),
    settings: Settings = Depends(get_app_settings),
) -> list[Template]:
    if category:
        return services.store.templates.by_category(category)
    if popular:
        limit = popular_limit(popular, settings.POPULAR_TEMPLATES_LIMIT)
        return services.store.templates.popular(limit)
    return services.templates.list_all()


@router.get("/{template_id}", response_model=Template)
async def get_template(template_id: str, services: Services = Depends(get_services)) -> Template:
    return services.templates.get(template_id)


@router.post("", response_model=Template, status_code=status.HTTP_201_CREATED)
async def create_template(
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Template:
    data = validate_payload(TemplateCreate, payload)
    return services.templates.create(data, actor)


@router.patch("/{template_id}", response_model=Template)
async def update_template(
    template_id: str,
    payload: Any = Body(...),
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Template:
    services.templates.get(template_id)
    patch = validate_payload(TemplateUpdate, payload)
    return services.templates.update(template_id, patch, actor)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_template(
    template_id: str,
    services: Services = Depends(get_services),
    actor: Actor = Depends(get_actor),
) -> Response:
    services.templates.delete(template_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
