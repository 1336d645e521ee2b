# taskmanager/schemas/common.py
"""
Helpers shared by the request schemas.
"""
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from taskmanager.core.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_error(exc: PydanticValidationError) -> str:
    """Turn the first pydantic error into a short human-readable message."""
    err = exc.errors()[0]
    msg = err.get("msg", "Invalid value")
    # Errors raised from our own validators come prefixed with "Value error, "
    msg = msg.removeprefix("Value error, ")
    loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    return f"{loc}: {msg}" if loc else msg


def validate_payload(model: type[ModelT], data: Any) -> ModelT:
    """
    Validate a raw request payload against a schema.

    Raises:
        ValidationError: If the payload does not satisfy the schema
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(format_validation_error(exc)) from exc


def not_blank(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value
