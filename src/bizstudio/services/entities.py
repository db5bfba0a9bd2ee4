"""Audited entity services -- store mutation followed by an audit write.

Each mutating call checks existence explicitly, applies the change to the
collection, then hands before/after snapshots to the AuditRecorder. The
recorder never raises, so the returned result does not depend on whether
the audit entry was written.
"""

from __future__ import annotations

from typing import Generic

import structlog
from pydantic import BaseModel

from src.bizstudio.audit.recorder import Actor, AuditRecorder
from src.bizstudio.core.errors import NotFoundError, ValidationError
from src.bizstudio.schemas.audit import AuditAction
from src.bizstudio.schemas.base import PatchModel
from src.bizstudio.schemas.builder import User, UserCreate, UserUpdate
from src.bizstudio.store.collection import EntityCollection, RecordT
from src.bizstudio.store.memory import UserCollection

logger = structlog.get_logger(__name__)


class AuditedEntityService(Generic[RecordT]):
    """CRUD over one collection with an audit entry per successful mutation.

    Args:
        collection: The store collection owning the records.
        entity_type: Name recorded in audit entries (e.g. "Deal").
        recorder: AuditRecorder receiving CREATE/UPDATE/DELETE events.
    """

    def __init__(
        self,
        collection: EntityCollection[RecordT],
        entity_type: str,
        recorder: AuditRecorder,
    ) -> None:
        self.collection = collection
        self.entity_type = entity_type
        self._recorder = recorder

    def list_all(self) -> list[RecordT]:
        return self.collection.get_all()

    def get(self, entity_id: str) -> RecordT:
        """Return the record or raise NotFoundError."""
        record = self.collection.get_by_id(entity_id)
        if record is None:
            raise NotFoundError(self.entity_type, entity_id)
        return record

    def create(self, data: BaseModel, actor: Actor | None = None) -> RecordT:
        record = self.collection.create(data)
        logger.info("store.created", entity_type=self.entity_type, entity_id=record.id)
        self._recorder.record(
            AuditAction.CREATE, self.entity_type, record.id, new=record, actor=actor
        )
        return record

    def update(self, entity_id: str, patch: PatchModel, actor: Actor | None = None) -> RecordT:
        old = self.get(entity_id)
        updated = self.collection.update(entity_id, patch)
        if updated is None:
            raise NotFoundError(self.entity_type, entity_id)
        logger.info(
            "store.updated",
            entity_type=self.entity_type,
            entity_id=entity_id,
            fields=sorted(patch.changes()),
        )
        self._recorder.record(
            AuditAction.UPDATE, self.entity_type, entity_id, old=old, new=updated, actor=actor
        )
        return updated

    def delete(self, entity_id: str, actor: Actor | None = None) -> None:
        old = self.get(entity_id)
        if not self.collection.delete(entity_id):
            raise NotFoundError(self.entity_type, entity_id)
        logger.info("store.deleted", entity_type=self.entity_type, entity_id=entity_id)
        self._recorder.record(
            AuditAction.DELETE, self.entity_type, entity_id, old=old, actor=actor
        )


class UserService(AuditedEntityService[User]):
    """User CRUD with a unique email address per user."""

    collection: UserCollection

    def __init__(self, collection: UserCollection, recorder: AuditRecorder) -> None:
        super().__init__(collection, "User", recorder)

    def _ensure_email_free(self, email: str, exclude_id: str | None = None) -> None:
        existing = self.collection.by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise ValidationError(
                details=[
                    {
                        "field": "email",
                        "message": "Email already registered",
                        "type": "value_error.duplicate",
                    }
                ]
            )

    def create(self, data: UserCreate, actor: Actor | None = None) -> User:
        self._ensure_email_free(data.email)
        return super().create(data, actor)

    def update(self, entity_id: str, patch: UserUpdate, actor: Actor | None = None) -> User:
        if patch.email is not None:
            self.get(entity_id)
            self._ensure_email_free(patch.email, exclude_id=entity_id)
        return super().update(entity_id, patch, actor)
