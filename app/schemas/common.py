"""Shared response envelopes and form parsing helpers."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.errors import ValidationError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class DataResponse(BaseModel, Generic[T]):
    """Envelope for a single object."""

    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Envelope for a list of objects."""

    success: bool = True
    count: int
    data: list[T]


class MessageResponse(BaseModel):
    """Envelope carrying only a status message."""

    success: bool = True
    message: str


def format_validation_errors(errors: Sequence[Any]) -> str:
    """Render pydantic error dicts as one human-readable line."""
    parts = []
    for error in errors:
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")
        )
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def parse_form(model: type[M], **values: Any) -> M:
    """Validate raw form values against a schema.

    Multipart endpoints collect their fields individually; this gives them
    the same typed boundary JSON bodies get, raising the domain
    ``ValidationError`` instead of pydantic's.
    """
    try:
        return model.model_validate(values)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_errors(e.errors()))


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only strings as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
