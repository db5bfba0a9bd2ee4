"""Read-only audit trail endpoints.

Filters are exclusive and applied in precedence order:
entityType+entityId, then userId, then startDate+endDate. A request that
supplies none of the complete pairs gets the whole trail. Results are
always newest first.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from src.bizstudio.api.deps import get_services
from src.bizstudio.schemas.analytics import AuditSummary
from src.bizstudio.schemas.audit import AuditLog
from src.bizstudio.services.registry import Services

router = APIRouter(prefix="/audit-logs", tags=["audit"])


@router.get("", response_model=list[AuditLog])
async def list_audit_logs(
    entity_type: str | None = Query(default=None, alias="entityType"),
    entity_id: str | None = Query(default=None, alias="entityId"),
    user_id: str | None = Query(default=None, alias="userId"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    services: Services = Depends(get_services),
) -> list[AuditLog]:
    logs = services.store.audit_logs
    if entity_type and entity_id:
        return logs.by_entity(entity_type, entity_id)
    if user_id:
        return logs.by_user(user_id)
    if start_date and end_date:
        return logs.by_date_range(start_date, end_date)
    return logs.get_all()


@router.get("/summary", response_model=AuditSummary)
async def audit_log_summary(services: Services = Depends(get_services)) -> AuditSummary:
    """Entry counts per action and per entity type."""
    return services.analytics.audit_summary()
