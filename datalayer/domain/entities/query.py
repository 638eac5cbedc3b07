"""Query definitions: filter, sort and paging over any record type.

Field names arrive as strings (typically from a UI grid) and are resolved
against the target type once, when a predicate or sort key is built. An
unknown field or operator fails there, never silently at match time.

All filter comparisons are textual: the field's value is converted to its
canonical string form first, so numbers and dates only support text
matching. Matching is case-sensitive unless ``ignore_case`` is set.
"""

import dataclasses
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from functools import lru_cache
from operator import attrgetter
from typing import Any, TypeVar
from urllib.parse import parse_qsl, urlencode

from pydantic.alias_generators import to_snake

from datalayer.domain.entities.list_view import PagedList
from datalayer.domain.exceptions import ArgumentError, FieldResolutionError, UnsupportedOperatorError

T = TypeVar("T")

TAKE_ALL = -1

CONTAINS = "contains"
ENDS_WITH = "ends with"
EQUALS = "equals"
IS_EMPTY = "is empty"
IS_NOT_EMPTY = "is not empty"
NOT_CONTAINS = "not contains"
NOT_EQUALS = "not equals"
STARTS_WITH = "starts with"

_TextComparison = Callable[[str | None, str], bool]

_OPERATORS: dict[str, _TextComparison] = {
    CONTAINS: lambda text, value: text is not None and value in text,
    ENDS_WITH: lambda text, value: text is not None and text.endswith(value),
    EQUALS: lambda text, value: text is not None and text == value,
    IS_EMPTY: lambda text, value: not text,
    IS_NOT_EMPTY: lambda text, value: bool(text),
    NOT_CONTAINS: lambda text, value: text is not None and value not in text,
    NOT_EQUALS: lambda text, value: text is not None and text != value,
    STARTS_WITH: lambda text, value: text is not None and text.startswith(value),
}

SUPPORTED_OPERATORS = frozenset(_OPERATORS)

_INDEXED_PARAM = re.compile(r"^(FilterDefinitions|SortDefinitions)\[(\d+)\]\.(\w+)$", re.IGNORECASE)


# ── Field resolution ────────────────────────────────────────────────


def _public_members(target_type: type) -> set[str]:
    """Names of the data fields and properties a type exposes."""
    names: set[str] = set()
    if dataclasses.is_dataclass(target_type):
        names.update(f.name for f in dataclasses.fields(target_type))
    names.update(getattr(target_type, "model_fields", {}) or {})
    for klass in target_type.__mro__:
        names.update(getattr(klass, "__annotations__", {}))
        names.update(
            name for name, member in vars(klass).items() if isinstance(member, property)
        )
    return {name for name in names if not name.startswith("_")}


@lru_cache(maxsize=None)
def resolve_accessor(target_type: type, field_name: str) -> Callable[[Any], Any]:
    """Return a getter for ``field_name`` on instances of ``target_type``.

    Accepts the attribute name itself or its camelCase wire form
    (``createdOn`` for ``created_on``). Cached per (type, name).
    """
    members = _public_members(target_type)
    for candidate in (field_name, to_snake(field_name) if field_name else field_name):
        if candidate and candidate in members:
            return attrgetter(candidate)
    raise FieldResolutionError(target_type.__name__, field_name)


def stringify(value: Any) -> str | None:
    """Canonical text form used by every filter operator; ``None`` stays absent."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _sort_key(value: Any) -> tuple:
    # None sorts first and never gets compared against a real value.
    # Text sorts after numbers so mixed int | str identifiers stay comparable.
    if value is None:
        return (0,)
    if isinstance(value, Enum):
        value = value.value
    return (1, isinstance(value, str), value)


def _normalise_operator(operator: str | None) -> str:
    return " ".join((operator or "").lower().split())


# ── Definitions ─────────────────────────────────────────────────────


@dataclass
class FilterDefinition:
    """Keep records whose ``filter_on`` field matches ``value`` under ``operator``."""

    filter_on: str = ""
    operator: str = CONTAINS
    value: str = ""
    ignore_case: bool = False

    def to_predicate(self, target_type: type[T]) -> Callable[[T], bool]:
        compare = _OPERATORS.get(_normalise_operator(self.operator))
        if compare is None:
            raise UnsupportedOperatorError(self.operator)
        accessor = resolve_accessor(target_type, self.filter_on)

        ignore_case = self.ignore_case
        value = self.value or ""
        if ignore_case:
            value = value.casefold()

        def predicate(obj: T) -> bool:
            text = stringify(accessor(obj))
            if ignore_case and text is not None:
                text = text.casefold()
            return compare(text, value)

        return predicate


@dataclass
class SortDefinition:
    """Order records by ``sort_on``; ``descending`` flips the direction."""

    sort_on: str = ""
    descending: bool = False

    def to_key_selector(self, target_type: type[T]) -> Callable[[T], tuple]:
        """Key function for ``sorted``/``list.sort``; ``None`` values sort first."""
        accessor = resolve_accessor(target_type, self.sort_on)
        return lambda obj: _sort_key(accessor(obj))


@dataclass
class QueryDefinition:
    """Filters (AND-ed), sorts (primary first), then a ``skip``/``take`` window.

    ``take`` of ``TAKE_ALL`` means no upper bound. Negative ``skip`` or
    ``take`` (other than ``TAKE_ALL``) is rejected with ``ArgumentError``.
    """

    filter_definitions: list[FilterDefinition] = field(default_factory=list)
    sort_definitions: list[SortDefinition] = field(default_factory=list)
    skip: int = 0
    take: int = TAKE_ALL

    def __post_init__(self) -> None:
        self._check_paging()

    def _check_paging(self) -> None:
        if self.skip < 0:
            raise ArgumentError("skip", f"skip must be zero or positive, got {self.skip}")
        if self.take < 0 and self.take != TAKE_ALL:
            raise ArgumentError("take", f"take must be zero, positive or TAKE_ALL, got {self.take}")

    def to_predicate(self, target_type: type[T]) -> Callable[[T], bool]:
        """All filters combined with logical AND; no filters keeps everything."""
        predicates = [f.to_predicate(target_type) for f in self.filter_definitions]
        return lambda obj: all(predicate(obj) for predicate in predicates)

    def apply(self, items: Iterable[T], target_type: type[T] | None = None) -> PagedList[T]:
        """Run the query against an in-memory sequence.

        ``target_type`` defaults to the type of the first item. Every field
        and operator is resolved before any row is examined.
        """
        self._check_paging()
        rows = list(items)
        if target_type is None:
            if not rows:
                return PagedList(data_objects=[], total_records=0)
            target_type = type(rows[0])

        predicate = self.to_predicate(target_type)
        sort_keys = [
            (sort.to_key_selector(target_type), sort.descending)
            for sort in self.sort_definitions
        ]

        rows = [row for row in rows if predicate(row)]

        # Stable sorts applied from the least to the most significant key.
        for key, descending in reversed(sort_keys):
            rows.sort(key=key, reverse=descending)

        total_records = len(rows)
        if self.take == TAKE_ALL:
            page = rows[self.skip:]
        else:
            page = rows[self.skip:self.skip + self.take]
        return PagedList(data_objects=page, total_records=total_records)

    # ── Query-string form ──

    def to_query_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = [("Skip", str(self.skip)), ("Take", str(self.take))]
        for index, f in enumerate(self.filter_definitions):
            params.append((f"FilterDefinitions[{index}].FilterOn", f.filter_on))
            params.append((f"FilterDefinitions[{index}].Operator", f.operator))
            params.append((f"FilterDefinitions[{index}].Value", f.value))
            if f.ignore_case:
                params.append((f"FilterDefinitions[{index}].IgnoreCase", "True"))
        for index, s in enumerate(self.sort_definitions):
            params.append((f"SortDefinitions[{index}].Descending", str(s.descending)))
            params.append((f"SortDefinitions[{index}].SortOn", s.sort_on))
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_query_params())

    @classmethod
    def from_query_params(
        cls, params: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> "QueryDefinition":
        """Inverse of ``to_query_params``; unknown parameters are ignored."""
        items = params.items() if isinstance(params, Mapping) else params
        skip, take = 0, TAKE_ALL
        filters: dict[int, dict[str, str]] = {}
        sorts: dict[int, dict[str, str]] = {}

        for name, raw in items:
            lowered = name.lower()
            if lowered in ("skip", "take"):
                try:
                    number = int(raw)
                except (TypeError, ValueError):
                    raise ArgumentError(name, f"{name} must be an integer, got {raw!r}") from None
                if lowered == "skip":
                    skip = number
                else:
                    take = number
                continue

            match = _INDEXED_PARAM.match(name)
            if match is None:
                continue
            group, index, attribute = match.groups()
            target = filters if group.lower() == "filterdefinitions" else sorts
            target.setdefault(int(index), {})[attribute.lower()] = raw

        return cls(
            filter_definitions=[
                FilterDefinition(
                    filter_on=entry.get("filteron", ""),
                    operator=entry.get("operator", CONTAINS),
                    value=entry.get("value", ""),
                    ignore_case=entry.get("ignorecase", "").lower() == "true",
                )
                for _, entry in sorted(filters.items())
            ],
            sort_definitions=[
                SortDefinition(
                    sort_on=entry.get("sorton", ""),
                    descending=entry.get("descending", "").lower() == "true",
                )
                for _, entry in sorted(sorts.items())
            ],
            skip=skip,
            take=take,
        )

    @classmethod
    def from_query_string(cls, query_string: str) -> "QueryDefinition":
        return cls.from_query_params(parse_qsl(query_string.lstrip("?"), keep_blank_values=True))
