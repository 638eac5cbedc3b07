"""JSON payload <-> data object conversion.

Entities are plain dataclasses with snake_case attributes; the wire uses
camelCase keys. pydantic's TypeAdapter does the type coercion (ISO strings
to datetime, and so on) so the domain stays free of pydantic models.
"""

import dataclasses
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic.alias_generators import to_camel, to_snake

from datalayer.domain.entities import DataObject

T = TypeVar("T", bound=DataObject)


@lru_cache(maxsize=None)
def _adapter(data_object_type: type) -> TypeAdapter:
    return TypeAdapter(data_object_type)


@lru_cache(maxsize=None)
def _field_names(data_object_type: type) -> frozenset[str]:
    return frozenset(f.name for f in dataclasses.fields(data_object_type))


def encode_data_object(data_object: DataObject) -> dict[str, Any]:
    """Serialise a data object to a JSON-ready dict with camelCase keys."""
    payload = _adapter(type(data_object)).dump_python(data_object, mode="json")
    return {to_camel(name): value for name, value in payload.items()}


def decode_data_object(data_object_type: type[T], payload: Any) -> T:
    """Build a ``data_object_type`` from a decoded JSON object.

    Accepts camelCase or snake_case keys and ignores keys the type does not
    declare. Raises ``ValueError`` (including pydantic's ValidationError)
    when the payload does not fit.
    """
    if not isinstance(payload, dict):
        raise ValueError(
            f"Expected a JSON object for {data_object_type.__name__}, got {type(payload).__name__}"
        )

    names = _field_names(data_object_type)
    data: dict[str, Any] = {}
    for raw_name, value in payload.items():
        name = raw_name if raw_name in names else to_snake(raw_name)
        if name not in names:
            continue
        # Keys are opaque text; servers with integer identities send numbers.
        if name == "key" and isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        data[name] = value
    return _adapter(data_object_type).validate_python(data)


def decode_data_objects(data_object_type: type[T], payload: Any) -> list[T]:
    if not isinstance(payload, list):
        raise ValueError(
            f"Expected a JSON array of {data_object_type.__name__}, got {type(payload).__name__}"
        )
    return [decode_data_object(data_object_type, item) for item in payload]
