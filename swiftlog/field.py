"""Typed key/value fields and their constructors."""

from __future__ import annotations

import operator
import struct
import traceback
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum, auto
from typing import Any


class FieldType(Enum):
    """How a field's value is stored and should be encoded."""

    UNKNOWN = auto()
    ARRAY_MARSHALER = auto()
    OBJECT_MARSHALER = auto()
    BINARY = auto()
    BOOL = auto()
    BYTE_STRING = auto()
    COMPLEX128 = auto()
    COMPLEX64 = auto()
    DURATION = auto()
    FLOAT64 = auto()
    FLOAT32 = auto()
    INT64 = auto()
    INT32 = auto()
    INT16 = auto()
    INT8 = auto()
    STRING = auto()
    TIME = auto()
    TIME_FULL = auto()
    UINT64 = auto()
    UINT32 = auto()
    UINT16 = auto()
    UINT8 = auto()
    UINTPTR = auto()
    REFLECT = auto()
    NAMESPACE = auto()
    STRINGER = auto()
    ERROR = auto()
    SKIP = auto()
    INLINE_MARSHALER = auto()


@dataclass
class Field:
    """A key with a lazily encoded value."""

    key: str = ""
    type: FieldType = FieldType.UNKNOWN
    integer: int = 0
    string: str = ""
    interface: Any = None


_MIN_INT64 = -(1 << 63)
_MAX_INT64 = (1 << 63) - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _ranged(val: Any, bits: int, signed: bool) -> int:
    n = operator.index(val)
    if signed:
        lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        lo, hi = 0, (1 << bits) - 1
    if not lo <= n <= hi:
        kind = "int" if signed else "uint"
        raise OverflowError(f"{n} does not fit in {kind}{bits}")
    return n


def _as_int64(n: int) -> int:
    return n - (1 << 64) if n > _MAX_INT64 else n


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")


def _duration_nanos(val: timedelta) -> int:
    return (val.days * 86400 + val.seconds) * 1_000_000_000 + val.microseconds * 1000


def _unix_nanos(t: datetime) -> int | None:
    try:
        aware = t if t.tzinfo is not None else t.astimezone()
        return _duration_nanos(aware - _EPOCH)
    except (OverflowError, OSError, ValueError):
        return None


def _take_stacktrace(skip: int) -> str:
    frames = traceback.extract_stack()[:-1]
    frames.reverse()
    return "\n".join(f"{fr.name}\n\t{fr.filename}:{fr.lineno}" for fr in frames[skip:])


def _nil_field(key: str) -> Field:
    return reflect(key, None)


def skip() -> Field:
    """Return a no-op field."""
    return Field(type=FieldType.SKIP)


def binary(key: str, val: bytes) -> Field:
    """Return a field carrying an opaque binary blob."""
    return Field(key=key, type=FieldType.BINARY, interface=bytes(val))


def bool_(key: str, val: bool | None) -> Field:
    """Return a field carrying a bool, or an explicit nil for None."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.BOOL, integer=1 if val else 0)


def byte_string(key: str, val: bytes) -> Field:
    """Return a field carrying UTF-8 text as bytes."""
    return Field(key=key, type=FieldType.BYTE_STRING, interface=bytes(val))


def complex128(key: str, val: complex | None) -> Field:
    """Return a field carrying a complex number."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.COMPLEX128, interface=complex(val))


def complex64(key: str, val: complex | None) -> Field:
    """Return a field carrying a complex number with single-precision parts."""
    if val is None:
        return _nil_field(key)
    c = complex(val)
    rounded = complex(_to_float32(c.real), _to_float32(c.imag))
    return Field(key=key, type=FieldType.COMPLEX64, interface=rounded)


def float64(key: str, val: float | None) -> Field:
    """Return a field carrying a double, stored as its IEEE-754 bits."""
    if val is None:
        return _nil_field(key)
    (bits,) = struct.unpack("<q", struct.pack("<d", float(val)))
    return Field(key=key, type=FieldType.FLOAT64, integer=bits)


def float32(key: str, val: float | None) -> Field:
    """Return a field carrying a single-precision float, stored as its bits."""
    if val is None:
        return _nil_field(key)
    (bits,) = struct.unpack("<I", struct.pack("<f", _to_float32(float(val))))
    return Field(key=key, type=FieldType.FLOAT32, integer=bits)


def int_(key: str, val: int | None) -> Field:
    """Return a field carrying an integer."""
    return int64(key, val)


def int64(key: str, val: int | None) -> Field:
    """Return a field carrying a 64-bit signed integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.INT64, integer=_ranged(val, 64, True))


def int32(key: str, val: int | None) -> Field:
    """Return a field carrying a 32-bit signed integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.INT32, integer=_ranged(val, 32, True))


def int16(key: str, val: int | None) -> Field:
    """Return a field carrying a 16-bit signed integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.INT16, integer=_ranged(val, 16, True))


def int8(key: str, val: int | None) -> Field:
    """Return a field carrying an 8-bit signed integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.INT8, integer=_ranged(val, 8, True))


def string(key: str, val: str | None) -> Field:
    """Return a field carrying a string."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.STRING, string=val)


def uint(key: str, val: int | None) -> Field:
    """Return a field carrying an unsigned integer."""
    return uint64(key, val)


def uint64(key: str, val: int | None) -> Field:
    """Return a field carrying a 64-bit unsigned integer, stored as signed bits."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.UINT64, integer=_as_int64(_ranged(val, 64, False)))


def uint32(key: str, val: int | None) -> Field:
    """Return a field carrying a 32-bit unsigned integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.UINT32, integer=_ranged(val, 32, False))


def uint16(key: str, val: int | None) -> Field:
    """Return a field carrying a 16-bit unsigned integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.UINT16, integer=_ranged(val, 16, False))


def uint8(key: str, val: int | None) -> Field:
    """Return a field carrying an 8-bit unsigned integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.UINT8, integer=_ranged(val, 8, False))


def uintptr(key: str, val: int | None) -> Field:
    """Return a field carrying a pointer-sized unsigned integer."""
    if val is None:
        return _nil_field(key)
    return Field(key=key, type=FieldType.UINTPTR, integer=_as_int64(_ranged(val, 64, False)))


def reflect(key: str, val: Any) -> Field:
    """Return a field carrying an arbitrary object, serialized generically."""
    return Field(key=key, type=FieldType.REFLECT, interface=val)


def namespace(key: str) -> Field:
    """Return a field opening a named scope for subsequent fields."""
    return Field(key=key, type=FieldType.NAMESPACE)


def stringer(key: str, val: Any) -> Field:
    """Return a field whose value is str(val), computed lazily."""
    return Field(key=key, type=FieldType.STRINGER, interface=val)


def time_(key: str, val: datetime | None) -> Field:
    """Return a field carrying a time.

    Times representable as int64 Unix nanoseconds are stored compactly with
    their tzinfo; others are stored whole.
    """
    if val is None:
        return _nil_field(key)
    nanos = _unix_nanos(val)
    if nanos is None or not _MIN_INT64 <= nanos <= _MAX_INT64:
        return Field(key=key, type=FieldType.TIME_FULL, interface=val)
    return Field(key=key, type=FieldType.TIME, integer=nanos, interface=val.tzinfo)


def duration(key: str, val: timedelta | None) -> Field:
    """Return a field carrying a duration, stored in nanoseconds."""
    if val is None:
        return _nil_field(key)
    nanos = _duration_nanos(val)
    if not _MIN_INT64 <= nanos <= _MAX_INT64:
        raise OverflowError(f"duration {val} does not fit in int64 nanoseconds")
    return Field(key=key, type=FieldType.DURATION, integer=nanos)


def _require_object_marshaler(val: Any) -> None:
    if not callable(getattr(val, "marshal_log_object", None)):
        raise TypeError(f"{type(val).__name__} has no marshal_log_object method")


def object_(key: str, val: Any) -> Field:
    """Return a field carrying an object that marshals itself."""
    _require_object_marshaler(val)
    return Field(key=key, type=FieldType.OBJECT_MARSHALER, interface=val)


def inline(val: Any) -> Field:
    """Return a field whose object members are added to the current namespace."""
    _require_object_marshaler(val)
    return Field(type=FieldType.INLINE_MARSHALER, interface=val)


def stack(key: str) -> Field:
    """Return a field holding the stack trace of the caller."""
    return stack_skip(key, 1)


def stack_skip(key: str, skip: int) -> Field:
    """Return a stack trace field, skipping `skip` frames above the caller."""
    return string(key, _take_stacktrace(skip + 1))