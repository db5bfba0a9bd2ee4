"""Validation gate: raw JSON payload -> typed schema, before any mutation.

Endpoints take the request body as raw JSON and pass it through
validate_payload() so that ordering stays explicit (e.g. PATCH checks the
target exists before the body is validated). Pydantic collects every
violated constraint, and all of them are reported in one ValidationError.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.bizstudio.core.errors import ValidationError, format_error_details

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_payload(schema: type[ModelT], payload: Any) -> ModelT:
    """Validate a decoded JSON body against an entity schema.

    Args:
        schema: Pydantic model describing the accepted shape.
        payload: Decoded JSON body.

    Returns:
        The validated model instance.

    Raises:
        ValidationError: With one detail per violated field constraint.
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            details=[
                {
                    "field": "body",
                    "message": "Request body must be a JSON object",
                    "type": "model_type",
                }
            ]
        )
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(details=format_error_details(exc.errors())) from None
