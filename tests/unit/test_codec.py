"""Unit tests for the JSON <-> data object codec."""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from datalayer.domain.entities import (
    SubUserEditableDataObject,
    UserEditableDataObject,
    checked_field,
)
from datalayer.infrastructure.http.codec import (
    decode_data_object,
    decode_data_objects,
    encode_data_object,
)


def test_encode_uses_camel_case_keys():
    obj = SubUserEditableDataObject(
        key="3",
        name="Invoice",
        owner_id=9,
        created_on=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )

    payload = encode_data_object(obj)

    assert payload["key"] == "3"
    assert payload["ownerId"] == 9
    assert payload["lastEditedOn"] is None
    assert payload["createdOn"].startswith("2024-01-02T03:04:05")


def test_decode_accepts_camel_and_snake_keys():
    obj = decode_data_object(
        UserEditableDataObject,
        {"key": 11, "name": "A", "last_edited_by": "bo", "lastEditedOn": "2024-06-01T00:00:00"},
    )

    assert obj.key == "11"
    assert obj.last_edited_by == "bo"
    assert obj.last_edited_on == datetime(2024, 6, 1)


def test_decode_keeps_text_owner_ids():
    obj = decode_data_object(SubUserEditableDataObject, {"ownerId": "acct-1"})
    assert obj.owner_id == "acct-1"
    assert obj.owner_integer_id == 0


@pytest.mark.parametrize("payload", [[], "text", 5])
def test_decode_rejects_non_objects(payload):
    with pytest.raises(ValueError):
        decode_data_object(UserEditableDataObject, payload)


def test_decode_rejects_bad_field_types():
    with pytest.raises(ValueError):
        decode_data_object(UserEditableDataObject, {"createdOn": "not a date"})


def test_decode_many_requires_array():
    assert decode_data_objects(UserEditableDataObject, []) == []
    with pytest.raises(ValueError):
        decode_data_objects(UserEditableDataObject, {"key": "1"})


def test_decode_does_not_enforce_validate_checks():
    @dataclass
    class Tagged(UserEditableDataObject):
        tag: str | None = checked_field(max_length=2)

    obj = decode_data_object(Tagged, {"name": "   ", "tag": "too long"})

    assert obj.tag == "too long"
    assert {v.property_name for v in obj.validate()} == {"name", "tag"}
