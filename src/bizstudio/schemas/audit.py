"""Pydantic schemas for the append-only audit trail."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from src.bizstudio.schemas.base import CamelModel, RecordModel


class AuditAction(str, Enum):
    """Kind of mutation captured by an audit entry."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditLogCreate(CamelModel):
    """Fields supplied by the recorder; id and timestamp come from the store."""

    action: AuditAction
    entity_type: str = Field(min_length=1)
    entity_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    user_name: str = Field(min_length=1)
    old_data: str | None = None
    new_data: str | None = None
    ip_address: str | None = None


class AuditLog(RecordModel):
    """Stored audit entry. oldData/newData hold JSON snapshots."""

    action: AuditAction
    entity_type: str
    entity_id: str
    user_id: str
    user_name: str
    old_data: str | None = None
    new_data: str | None = None
    timestamp: datetime
    ip_address: str | None = None
