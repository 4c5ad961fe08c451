"""Field constructors for homogeneous sequences of values."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from swiftlog.field import Field, FieldType


def _single(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", float(value)))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _checked(nums: Iterable[int], bits: int, signed: bool) -> tuple[int, ...]:
    if signed:
        lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        lo, hi = 0, (1 << bits) - 1
    result = []
    for n in nums:
        if not lo <= n <= hi:
            kind = "int" if signed else "uint"
            raise OverflowError(f"{n} does not fit in {kind}{bits}")
        result.append(int(n))
    return tuple(result)


@dataclass(frozen=True)
class SliceMarshaler:
    """Marshals a sequence by calling one encoder append method per element."""

    values: tuple[Any, ...]
    method: str

    def marshal_log_array(self, arr: Any) -> None:
        """Append every value to the array encoder."""
        append = getattr(arr, self.method)
        for value in self.values:
            append(value)


def array(key: str, val: Any) -> Field:
    """Return a field carrying an object that marshals itself as an array."""
    if not callable(getattr(val, "marshal_log_array", None)):
        raise TypeError(f"{type(val).__name__} has no marshal_log_array method")
    return Field(key=key, type=FieldType.ARRAY_MARSHALER, interface=val)


def _slice(key: str, values: Iterable[Any], method: str) -> Field:
    return array(key, SliceMarshaler(tuple(values), method))


def bools(key: str, bs: Iterable[bool]) -> Field:
    """Return a field carrying a sequence of bools."""
    return _slice(key, (bool(b) for b in bs), "append_bool")


def byte_strings(key: str, bss: Iterable[bytes]) -> Field:
    """Return a field carrying a sequence of UTF-8 byte strings."""
    return _slice(key, (bytes(b) for b in bss), "append_byte_string")


def complex128s(key: str, nums: Iterable[complex]) -> Field:
    """Return a field carrying a sequence of complex numbers."""
    return _slice(key, (complex(n) for n in nums), "append_complex128")


def complex64s(key: str, nums: Iterable[complex]) -> Field:
    """Return a field carrying complex numbers with single-precision parts."""
    values = (complex(_single(complex(n).real), _single(complex(n).imag)) for n in nums)
    return _slice(key, values, "append_complex64")


def durations(key: str, ds: Iterable[timedelta]) -> Field:
    """Return a field carrying a sequence of durations."""
    values = tuple(ds)
    for d in values:
        if not isinstance(d, timedelta):
            raise TypeError(f"expected timedelta, got {type(d).__name__}")
    return _slice(key, values, "append_duration")


def float64s(key: str, nums: Iterable[float]) -> Field:
    """Return a field carrying a sequence of doubles."""
    return _slice(key, (float(n) for n in nums), "append_float64")


def float32s(key: str, nums: Iterable[float]) -> Field:
    """Return a field carrying a sequence of single-precision floats."""
    return _slice(key, (_single(n) for n in nums), "append_float32")


def ints(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of integers."""
    return _slice(key, _checked(nums, 64, True), "append_int")


def int64s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 64-bit integers."""
    return _slice(key, _checked(nums, 64, True), "append_int64")


def int32s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 32-bit integers."""
    return _slice(key, _checked(nums, 32, True), "append_int32")


def int16s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 16-bit integers."""
    return _slice(key, _checked(nums, 16, True), "append_int16")


def int8s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 8-bit integers."""
    return _slice(key, _checked(nums, 8, True), "append_int8")


def strings(key: str, ss: Iterable[str]) -> Field:
    """Return a field carrying a sequence of strings."""
    values = tuple(ss)
    for s in values:
        if not isinstance(s, str):
            raise TypeError(f"expected str, got {type(s).__name__}")
    return _slice(key, values, "append_string")


def times(key: str, ts: Iterable[datetime]) -> Field:
    """Return a field carrying a sequence of times."""
    values = tuple(ts)
    for t in values:
        if not isinstance(t, datetime):
            raise TypeError(f"expected datetime, got {type(t).__name__}")
    return _slice(key, values, "append_time")


def uints(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of unsigned integers."""
    return _slice(key, _checked(nums, 64, False), "append_uint")


def uint64s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 64-bit unsigned integers."""
    return _slice(key, _checked(nums, 64, False), "append_uint64")


def uint32s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 32-bit unsigned integers."""
    return _slice(key, _checked(nums, 32, False), "append_uint32")


def uint16s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 16-bit unsigned integers."""
    return _slice(key, _checked(nums, 16, False), "append_uint16")


def uint8s(key: str, nums: Iterable[int]) -> Field:
    """Return a field carrying a sequence of 8-bit unsigned integers."""
    return _slice(key, _checked(nums, 8, False), "append_uint8")


def uintptrs(key: str, us: Iterable[int]) -> Field:
    """Return a field carrying a sequence of pointer-sized unsigned integers."""
    return _slice(key, _checked(us, 64, False), "append_uintptr")