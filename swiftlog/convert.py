"""Choose the best field constructor for an arbitrary value."""

from __future__ import annotations

from collections.abc import Mapping, Set
from datetime import datetime, timedelta
from typing import Any, Callable

from swiftlog.array import (
    array,
    bools,
    complex128s,
    durations,
    float64s,
    ints,
    strings,
    times,
)
from swiftlog.error import errors, named_error
from swiftlog.field import (
    Field,
    binary,
    bool_,
    complex128,
    duration,
    float64,
    int_,
    object_,
    reflect,
    string,
    stringer,
    time_,
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_error_or_none(value: Any) -> bool:
    return value is None or isinstance(value, BaseException)


_SEQUENCE_KINDS: tuple[tuple[Callable[[Any], bool], Callable[[str, Any], Field]], ...] = (
    (lambda v: isinstance(v, bool), bools),
    (_is_int, ints),
    (lambda v: isinstance(v, float), float64s),
    (lambda v: isinstance(v, complex), complex128s),
    (lambda v: isinstance(v, str), strings),
    (lambda v: isinstance(v, datetime), times),
    (lambda v: isinstance(v, timedelta), durations),
)


def _sequence_field(key: str, items: list[Any] | tuple[Any, ...]) -> Field | None:
    if not items:
        return None
    for matches, constructor in _SEQUENCE_KINDS:
        if all(matches(item) for item in items):
            return constructor(key, items)
    if all(_is_error_or_none(item) for item in items) and any(
        item is not None for item in items
    ):
        return errors(key, items)
    return None


def _has_own_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def any_(key: str, value: Any) -> Field:
    """Return the most specific field for value, falling back to reflect."""
    if callable(getattr(value, "marshal_log_object", None)):
        return object_(key, value)
    if callable(getattr(value, "marshal_log_array", None)):
        return array(key, value)
    if value is None:
        return reflect(key, None)
    if isinstance(value, bool):
        return bool_(key, value)
    if isinstance(value, int):
        return int_(key, value)
    if isinstance(value, float):
        return float64(key, value)
    if isinstance(value, complex):
        return complex128(key, value)
    if isinstance(value, str):
        return string(key, value)
    if isinstance(value, (bytes, bytearray)):
        return binary(key, value)
    if isinstance(value, datetime):
        return time_(key, value)
    if isinstance(value, timedelta):
        return duration(key, value)
    if isinstance(value, BaseException):
        return named_error(key, value)
    if isinstance(value, (list, tuple)):
        field = _sequence_field(key, value)
        return field if field is not None else reflect(key, value)
    if isinstance(value, (Mapping, Set)):
        return reflect(key, value)
    if _has_own_str(value):
        return stringer(key, value)
    return reflect(key, value)