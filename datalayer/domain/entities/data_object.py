"""Data object hierarchy: the records exchanged with the remote service.

Each shape copies its own fields in ``map_properties`` after calling the
parent's implementation, so a multi-level hierarchy copies every field from
the most-derived shape the source shares with the target.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, TypeVar

from datalayer.domain.entities.identifier import Identifier, as_int32, as_int64, as_text
from datalayer.domain.entities.validation import ServerSideValidationError
from datalayer.domain.exceptions import ArgumentError

TDataObject = TypeVar("TDataObject", bound="DataObject")

# Field metadata key holding validate() checks; pydantic does not read it.
CHECKS_METADATA_KEY = "datalayer"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def checked_field(*, required: bool = False, max_length: int | None = None, **kwargs: Any) -> Any:
    """A dataclass field carrying checks for ``DataObject.validate()``.

    Extra keyword arguments go to ``dataclasses.field``. The checks only run
    in ``validate()``; decoding a record never enforces them.
    """
    if "default_factory" not in kwargs:
        kwargs.setdefault("default", None)
    checks = {"required": required, "max_length": max_length}
    return field(metadata={CHECKS_METADATA_KEY: checks}, **kwargs)


@dataclass
class DataObject:
    """Identity-bearing base entity.

    Fields declared with ``checked_field`` drive ``validate()``: ``required``
    rejects ``None`` and blank text, ``max_length`` caps text length.
    """

    key: str | None = None

    @property
    def key_as_int32(self) -> int:
        """The key as a 32-bit integer, or 0 when it is not one."""
        return as_int32(self.key)

    @property
    def key_as_int64(self) -> int:
        """The key as a 64-bit integer, or 0 when it is not one."""
        return as_int64(self.key)

    def is_same_record(self, other: "DataObject | None") -> bool:
        """True when both objects carry the same (non-empty) key."""
        if other is None or self.key is None or other.key is None:
            return False
        return self.key == other.key

    def map_properties(self, data_object: "DataObject") -> None:
        """Copy every field this shape shares with ``data_object`` onto self."""
        if data_object is None:
            raise ArgumentError("data_object")
        self.key = data_object.key

    @classmethod
    def copy_of(cls: type[TDataObject], data_object: "DataObject") -> TDataObject:
        """Build a new instance of ``cls`` populated from ``data_object``."""
        copy = cls()
        copy.map_properties(data_object)
        return copy

    def validate(self) -> list[ServerSideValidationError]:
        """Run the declared field checks and return every violation found."""
        violations: list[ServerSideValidationError] = []
        for f in fields(self):
            checks = f.metadata.get(CHECKS_METADATA_KEY) or {}
            value: Any = getattr(self, f.name)
            if checks.get("required") and (
                value is None or (isinstance(value, str) and not value.strip())
            ):
                violations.append(
                    ServerSideValidationError(
                        error_message=f"The {f.name} field is required.",
                        property_name=f.name,
                    )
                )
                continue

            max_length = checks.get("max_length")
            if max_length is not None and isinstance(value, str) and len(value) > max_length:
                violations.append(
                    ServerSideValidationError(
                        error_message=(
                            f"The field {f.name} must be a string with a maximum length of {max_length}."
                        ),
                        property_name=f.name,
                    )
                )
        return violations


@dataclass
class UserEditableDataObject(DataObject):
    """A record users create and edit, carrying audit information."""

    created_on: datetime = field(default_factory=_utc_now)
    description: str | None = None
    last_edited_by: str | None = None
    last_edited_by_id: str | None = None
    last_edited_on: datetime | None = None
    name: str | None = checked_field(required=True)

    def map_properties(self, data_object: DataObject) -> None:
        super().map_properties(data_object)

        if isinstance(data_object, UserEditableDataObject):
            self.created_on = data_object.created_on
            self.description = data_object.description
            self.last_edited_by = data_object.last_edited_by
            self.last_edited_by_id = data_object.last_edited_by_id
            self.last_edited_on = data_object.last_edited_on
            self.name = data_object.name


@dataclass
class SubUserEditableDataObject(UserEditableDataObject):
    """A user-editable record owned by another data object.

    For example, an account owns its transactions. Whether the owner is
    referenced by an integer or a text id is up to the deployment; both fit
    in ``owner_id``.
    """

    owner_id: Identifier | None = None

    @property
    def owner_integer_id(self) -> int:
        return as_int64(self.owner_id)

    @property
    def owner_string_id(self) -> str:
        return as_text(self.owner_id)

    def map_properties(self, data_object: DataObject) -> None:
        super().map_properties(data_object)

        if isinstance(data_object, SubUserEditableDataObject):
            self.owner_id = data_object.owner_id
