"""Generic in-memory entity collections.

AppendOnlyCollection supports create and reads; EntityCollection adds update
and delete. Records are frozen Pydantic models held in insertion order.
Reads always return a new list, and updates replace the stored record with a
re-validated merged copy. Records hold only immutable values (tuples, not
lists), so nothing handed to a caller aliases mutable store state.

No method awaits, so under the single-threaded event loop each call runs to
completion before any other store call starts.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel

from src.bizstudio.schemas.base import PatchModel, RecordModel

RecordT = TypeVar("RecordT", bound=RecordModel)

Clock = Callable[[], datetime]


def new_id() -> str:
    """Fresh opaque entity identifier."""
    return str(uuid.uuid4())


class AppendOnlyCollection(Generic[RecordT]):
    """Ordered collection that only grows.

    Args:
        record_type: Frozen RecordModel subclass stored by this collection.
        clock: Callable returning the current (timezone-aware) time.
    """

    created_field = "created_at"

    def __init__(self, record_type: type[RecordT], clock: Clock) -> None:
        self._record_type = record_type
        self._clock = clock
        self._records: list[RecordT] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(list(self._records))

    def create(self, data: BaseModel) -> RecordT:
        """Build a record from validated input, assigning id and timestamps."""
        now = self._clock()
        fields = data.model_dump()
        fields["id"] = new_id()
        fields[self.created_field] = now
        if "updated_at" in self._record_type.model_fields:
            fields["updated_at"] = now
        record = self._record_type(**fields)
        self._records.append(record)
        return record

    def get_all(self) -> list[RecordT]:
        return list(self._records)

    def get_by_id(self, entity_id: str) -> RecordT | None:
        for record in self._records:
            if record.id == entity_id:
                return record
        return None

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [r for r in self._records if predicate(r)]

    def _index_of(self, entity_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == entity_id:
                return index
        return None


class EntityCollection(AppendOnlyCollection[RecordT]):
    """Collection with the full create/read/update/delete lifecycle."""

    def update(self, entity_id: str, patch: PatchModel) -> RecordT | None:
        """Merge the supplied patch fields onto the stored record.

        Refreshes updated_at where the record has one. Returns None when the
        id is unknown; never creates a record.
        """
        index = self._index_of(entity_id)
        if index is None:
            return None
        changes = patch.changes()
        if "updated_at" in self._record_type.model_fields:
            changes["updated_at"] = self._clock()
        updated = self._record_type.model_validate(
            {**self._records[index].model_dump(), **changes}
        )
        self._records[index] = updated
        return updated

    def delete(self, entity_id: str) -> bool:
        """Remove the first record with this id. False when absent."""
        index = self._index_of(entity_id)
        if index is None:
            return False
        del self._records[index]
        return True
