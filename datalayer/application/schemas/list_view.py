"""Pydantic DTOs for list views and paged lists on the wire."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from datalayer.domain.entities import ListView

# Keys older servers use for the id, most specific first.
_LEGACY_ID_KEYS = ("key", "stringID", "stringId", "integer64ID", "integer64Id")


class ListViewSchema(BaseModel):
    """Schema for one list view row."""

    id: int | str | None = None
    name: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _pick_identifier(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("id") is None:
            for legacy in _LEGACY_ID_KEYS:
                if data.get(legacy) not in (None, ""):
                    return {**data, "id": data[legacy]}
        return data

    def to_entity(self) -> ListView:
        return ListView(id=self.id, name=self.name)


class PagedListSchema(BaseModel):
    """Envelope of a paged response; rows are decoded by the caller."""

    data_objects: list[Any] = Field(default_factory=list)
    total_records: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
