"""Unit tests for the data object hierarchy and list views."""

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from datalayer.domain.entities import (
    DataObject,
    ListView,
    SubUserEditableDataObject,
    UserEditableDataObject,
    checked_field,
)
from datalayer.domain.exceptions import ArgumentError


def _sub(**overrides) -> SubUserEditableDataObject:
    values = dict(
        key="7",
        created_on=datetime(2024, 1, 2, tzinfo=timezone.utc),
        description="first",
        last_edited_by="ann",
        last_edited_by_id="u-1",
        last_edited_on=datetime(2024, 2, 3, tzinfo=timezone.utc),
        name="Alpha",
        owner_id=42,
    )
    values.update(overrides)
    return SubUserEditableDataObject(**values)


@dataclass
class Widget(UserEditableDataObject):
    code: str | None = checked_field(max_length=3)


# ── Keys ──


@pytest.mark.parametrize(
    "key, as_int32, as_int64",
    [
        ("123", 123, 123),
        (" 12 ", 12, 12),
        ("-5", -5, -5),
        ("3000000000", 0, 3000000000),
        ("abc", 0, 0),
        ("1_000", 0, 0),
        ("", 0, 0),
        (None, 0, 0),
    ],
)
def test_key_integer_forms_never_raise(key, as_int32, as_int64):
    obj = DataObject(key=key)
    assert obj.key_as_int32 == as_int32
    assert obj.key_as_int64 == as_int64


def test_is_same_record_compares_keys():
    assert DataObject(key="1").is_same_record(UserEditableDataObject(key="1", name="x"))
    assert not DataObject(key="1").is_same_record(DataObject(key="2"))
    assert not DataObject().is_same_record(DataObject())
    assert not DataObject(key="1").is_same_record(None)


def test_owner_id_conveniences():
    assert _sub(owner_id=42).owner_integer_id == 42
    assert _sub(owner_id=42).owner_string_id == "42"
    assert _sub(owner_id="abc").owner_integer_id == 0
    assert _sub(owner_id="abc").owner_string_id == "abc"
    assert _sub(owner_id=None).owner_string_id == ""


# ── map_properties ──


def test_map_properties_copies_every_field_of_same_shape():
    source = _sub()
    target = SubUserEditableDataObject()
    target.map_properties(source)
    assert target == source


def test_map_properties_is_idempotent():
    obj = _sub()
    obj.map_properties(obj)
    once = dataclasses.replace(obj)
    obj.map_properties(obj)
    assert obj == once == _sub()


def test_map_properties_from_base_shape_only_copies_key():
    target = _sub()
    target.map_properties(DataObject(key="99"))
    assert target.key == "99"
    assert target.name == "Alpha"
    assert target.description == "first"
    assert target.owner_id == 42


def test_map_properties_from_intermediate_shape_leaves_owner():
    target = _sub()
    target.map_properties(UserEditableDataObject(key="5", name="Beta"))
    assert target.key == "5"
    assert target.name == "Beta"
    assert target.description is None
    assert target.owner_id == 42


def test_map_properties_onto_base_copies_key_from_derived():
    target = DataObject()
    target.map_properties(_sub())
    assert target.key == "7"


def test_map_properties_rejects_none():
    with pytest.raises(ArgumentError):
        DataObject().map_properties(None)


def test_copy_of_builds_requested_shape():
    source = _sub()
    copy = UserEditableDataObject.copy_of(source)
    assert type(copy) is UserEditableDataObject
    assert copy is not source
    assert copy.name == "Alpha"
    assert copy.created_on == source.created_on


# ── validate ──


def test_validate_requires_name():
    errors = UserEditableDataObject(name=None).validate()
    assert [e.property_name for e in errors] == ["name"]
    assert "required" in errors[0].error_message

    assert [e.property_name for e in UserEditableDataObject(name="   ").validate()] == ["name"]
    assert UserEditableDataObject(name="ok").validate() == []


def test_validate_plain_data_object_has_no_checks():
    assert DataObject().validate() == []


def test_validate_max_length():
    errors = Widget(name="w", code="abcd").validate()
    assert [e.property_name for e in errors] == ["code"]
    assert Widget(name="w", code="abc").validate() == []


# ── ListView ──


def test_list_view_from_data_object():
    view = ListView.from_data_object(UserEditableDataObject(key="3", name="Three"))
    assert view.id == "3"
    assert view.name == "Three"
    assert view.integer_id == 3
    assert view.string_id == "3"


def test_list_view_from_data_object_without_name():
    view = ListView.from_data_object(DataObject(key="x"))
    assert view.name is None
    assert view.integer_id == 0


def test_list_view_copy_and_immutability():
    original = ListView(id=5, name="Five")
    copy = ListView.copy_of(original)
    assert copy == original
    assert copy is not original
    with pytest.raises(dataclasses.FrozenInstanceError):
        copy.name = "Six"  # type: ignore[misc]


def test_list_view_rejects_none():
    with pytest.raises(ArgumentError):
        ListView.from_data_object(None)
    with pytest.raises(ArgumentError):
        ListView.copy_of(None)
