"""Display projections: list views and paged lists."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from datalayer.domain.entities.data_object import DataObject
from datalayer.domain.entities.identifier import Identifier, as_int64, as_text
from datalayer.domain.exceptions import ArgumentError

T = TypeVar("T")


@dataclass(frozen=True)
class ListView:
    """Id + name of a data object, for listing in a UI without full records."""

    id: Identifier | None = None
    name: str | None = None

    @property
    def integer_id(self) -> int:
        return as_int64(self.id)

    @property
    def string_id(self) -> str:
        return as_text(self.id)

    @classmethod
    def from_data_object(cls, data_object: DataObject) -> "ListView":
        if data_object is None:
            raise ArgumentError("data_object")
        return cls(id=data_object.key, name=getattr(data_object, "name", None))

    @classmethod
    def copy_of(cls, list_view: "ListView") -> "ListView":
        if list_view is None:
            raise ArgumentError("list_view")
        return cls(id=list_view.id, name=list_view.name)


@dataclass
class PagedList(Generic[T]):
    """One page of records plus the total count outside the page window."""

    data_objects: list[T] = field(default_factory=list)
    total_records: int = 0
