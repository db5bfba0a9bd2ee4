"""Audit recorder -- best-effort append to the audit trail after each mutation.

The recorder is called once per successful store mutation, after the
mutation has committed. A failed write is logged and counted but never
raised: the caller's result is the same whether or not the audit entry
landed.

Exports:
    Actor: Who performed a mutation (user id/name, client ip).
    AuditRecorder: Writes AuditLog entries for CREATE/UPDATE/DELETE.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel

from src.bizstudio.core.monitoring import audit_writes_total
from src.bizstudio.schemas.audit import AuditAction, AuditLog, AuditLogCreate
from src.bizstudio.store.memory import AuditLogCollection

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    """Immutable identity of the caller behind a mutation."""

    user_id: str
    user_name: str
    ip_address: str | None = None


def snapshot(value: Any) -> str | None:
    """Serialize an entity snapshot to a JSON string (camelCase for models)."""
    if value is None:
        return None
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True)
    return json.dumps(value, default=str)


class AuditRecorder:
    """Append-only writer for the audit trail.

    Args:
        audit_logs: The store's audit log collection.
        default_actor: Actor used when a call does not supply one.
    """

    def __init__(self, audit_logs: AuditLogCollection, default_actor: Actor) -> None:
        self._audit_logs = audit_logs
        self._default_actor = default_actor

    @property
    def default_actor(self) -> Actor:
        return self._default_actor

    def record(
        self,
        action: AuditAction,
        entity_type: str,
        entity_id: str,
        old: Any = None,
        new: Any = None,
        actor: Actor | None = None,
    ) -> AuditLog | None:
        """Append one audit entry; return it, or None if the write failed.

        CREATE carries no old snapshot and DELETE no new one.
        """
        actor = actor or self._default_actor
        try:
            entry = AuditLogCreate(
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                user_id=actor.user_id,
                user_name=actor.user_name,
                old_data=snapshot(old),
                new_data=snapshot(new),
                ip_address=actor.ip_address,
            )
            log = self._audit_logs.create(entry)
        except Exception:
            logger.warning(
                "audit.write_failed",
                action=str(action),
                entity_type=entity_type,
                entity_id=entity_id,
                exc_info=True,
            )
            audit_writes_total.labels(entity_type=entity_type, outcome="failed").inc()
            return None

        audit_writes_total.labels(entity_type=entity_type, outcome="recorded").inc()
        logger.info(
            "audit.recorded",
            action=log.action.value,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=actor.user_id,
        )
        return log
