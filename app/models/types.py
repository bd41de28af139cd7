"""Column types that serialize Python values at the database boundary."""

import json
from typing import Any

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

from app.errors import ValidationError


def encode_list(value: list[Any] | None) -> str:
    """Encode a list as a JSON string. ``None`` encodes as an empty list."""
    if value is None:
        value = []
    if not isinstance(value, list):
        raise ValidationError(f"Expected a list, got {type(value).__name__}")
    return json.dumps(value, ensure_ascii=False)


def decode_list(raw: str | bytes | None) -> list[Any]:
    """Decode a JSON string produced by :func:`encode_list`.

    ``decode_list(encode_list(x)) == x`` for any JSON-serialisable list.
    Empty input decodes to ``[]``; anything that is not a JSON array is
    rejected.
    """
    if raw is None or raw == "" or raw == b"":
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Malformed JSON list: {e}")
    if not isinstance(value, list):
        raise ValidationError(f"Expected a JSON array, got {type(value).__name__}")
    return value


class JSONEncodedList(TypeDecorator):
    """Stores a Python list as JSON text."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[Any] | None, dialect) -> str:
        return encode_list(value)

    def process_result_value(self, value: str | None, dialect) -> list[Any]:
        return decode_list(value)
