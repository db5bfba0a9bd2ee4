"""FastAPI dependency injection for services and the request actor.

These dependencies are used in endpoint function signatures to inject the
application's Services container and the Actor recorded in audit entries.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from src.bizstudio.audit.recorder import Actor
from src.bizstudio.config import Settings, get_settings
from src.bizstudio.services.registry import Services


def get_services(request: Request) -> Services:
    """Retrieve Services from app.state, 503 if not available."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Services not initialized",
        )
    return services


def get_actor(request: Request) -> Actor:
    """Resolve who is acting from X-User-Id / X-User-Name headers.

    Falls back to the configured default HR manager when the request carries
    no identity. The client address is recorded as the ip.
    """
    services = get_services(request)
    default = services.recorder.default_actor
    user_id = request.headers.get("X-User-Id") or default.user_id
    user_name = request.headers.get("X-User-Name") or (
        default.user_name if user_id == default.user_id else user_id
    )
    ip_address = request.client.host if request.client else None
    return Actor(user_id=user_id, user_name=user_name, ip_address=ip_address)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with (falls back to the cached env settings)."""
    return getattr(request.app.state, "settings", None) or get_settings()
