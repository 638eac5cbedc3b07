"""Identifier helpers. One sum-typed id instead of parallel int/string fields."""

import re

Identifier = int | str

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


def parse_integer(value: Identifier | None, minimum: int = INT64_MIN, maximum: int = INT64_MAX) -> int:
    """Best-effort integer parse; returns 0 for missing, malformed or out-of-range values."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        number = value
    elif _INTEGER_PATTERN.match(value):
        number = int(value)
    else:
        return 0
    if number < minimum or number > maximum:
        return 0
    return number


def as_int32(value: Identifier | None) -> int:
    return parse_integer(value, INT32_MIN, INT32_MAX)


def as_int64(value: Identifier | None) -> int:
    return parse_integer(value, INT64_MIN, INT64_MAX)


def as_text(value: Identifier | None) -> str:
    """Text form of an identifier; empty string when unset."""
    return "" if value is None else str(value)


def is_blank(value: Identifier | None) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
