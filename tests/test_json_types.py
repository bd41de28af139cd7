"""JSON list column encoding."""

import pytest

from app.errors import ValidationError
from app.models.types import decode_list, encode_list


def test_round_trip_keeps_unicode_and_nesting():
    value = [{"id": "b1", "type": "text", "content": "Équipe été"}, [1, 2], None]
    assert decode_list(encode_list(value)) == value
    assert "Équipe" in encode_list(value)


@pytest.mark.parametrize("raw", [None, "", b""])
def test_empty_input_decodes_to_empty_list(raw):
    assert decode_list(raw) == []


def test_none_encodes_as_empty_list():
    assert encode_list(None) == "[]"


@pytest.mark.parametrize("raw", ["{not json", '{"a": 1}', "42"])
def test_malformed_or_non_list_is_rejected(raw):
    with pytest.raises(ValidationError):
        decode_list(raw)


def test_encoding_a_non_list_is_rejected():
    with pytest.raises(ValidationError):
        encode_list({"a": 1})
