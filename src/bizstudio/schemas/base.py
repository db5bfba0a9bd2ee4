"""Shared Pydantic base classes for entity schemas.

Attributes are snake_case in Python and camelCase on the wire. Both spellings
are accepted on input; responses are serialized by alias.

- CamelModel: base for request/response payloads.
- RecordModel: immutable stored entity (the store replaces, never mutates).
- PatchModel: partial update; every field optional, explicit nulls rejected.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordModel(CamelModel):
    """Persisted entity record. Frozen so shared references stay read-only."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str


class PatchModel(CamelModel):
    """Partial update payload.

    Only fields present in the request are merged onto the stored record
    (``model_dump(exclude_unset=True)``). A field sent as ``null`` is a
    validation failure, not a request to clear it.
    """

    @field_validator("*")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)
