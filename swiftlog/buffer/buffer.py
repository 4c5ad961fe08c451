"""A growable byte buffer with allocation-free style formatting helpers."""

from __future__ import annotations

import math
import struct
from datetime import datetime
from decimal import Decimal
from typing import Any

DEFAULT_SIZE = 1024

# Layout names understood by Buffer.append_time in addition to strftime formats.
RFC3339 = "RFC3339"
RFC3339_NANO = "RFC3339Nano"


def _to_float32(value: float) -> float:
    """Round a float to single precision, overflowing to infinity."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _shortest_float32_digits(value: float) -> str:
    for precision in range(9):
        text = f"{value:.{precision}e}"
        if _to_float32(float(text)) == value:
            return text
    return f"{value:.8e}"


def _format_float(value: float, bit_size: int) -> str:
    if bit_size == 32:
        value = _to_float32(float(value))
    elif bit_size == 64:
        value = float(value)
    else:
        raise ValueError(f"unsupported float bit size: {bit_size}")
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    digits = _shortest_float32_digits(value) if bit_size == 32 else repr(value)
    return format(Decimal(digits).normalize(), "f")


def _format_offset(t: datetime) -> str:
    offset = t.utcoffset()
    if not offset:
        return "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    return f"{sign}{hours:02d}:{rest // 60:02d}"


def _format_time(t: datetime, layout: str) -> str:
    if layout not in (RFC3339, RFC3339_NANO):
        return t.strftime(layout)
    if t.tzinfo is None:
        t = t.astimezone()
    text = t.strftime("%Y-%m-%dT%H:%M:%S")
    if layout == RFC3339_NANO:
        fraction = f"{t.microsecond:06d}".rstrip("0")
        if fraction:
            text += "." + fraction
    return text + _format_offset(t)


class Buffer:
    """A thin wrapper around a bytearray, normally obtained from a Pool."""

    def __init__(self, size: int = DEFAULT_SIZE, pool: Any = None) -> None:
        self._bs = bytearray()
        self._capacity = size
        self._pool = pool

    def _grow(self) -> None:
        while len(self._bs) > self._capacity:
            self._capacity = max(self._capacity * 2, 1)

    def append_byte(self, v: int | bytes) -> None:
        """Append a single byte, given as an int or a one-byte bytes object."""
        if isinstance(v, (bytes, bytearray)):
            if len(v) != 1:
                raise ValueError("append_byte expects exactly one byte")
            v = v[0]
        if not 0 <= v <= 255:
            raise ValueError(f"byte value out of range: {v}")
        self._bs.append(v)
        self._grow()

    def append_string(self, s: str) -> None:
        """Append a string encoded as UTF-8."""
        self._bs += s.encode("utf-8")
        self._grow()

    def append_int(self, i: int) -> None:
        """Append an integer in base 10."""
        self.append_string(str(int(i)))

    def append_time(self, t: datetime, layout: str) -> None:
        """Append a time formatted with a strftime layout, RFC3339 or RFC3339_NANO."""
        self.append_string(_format_time(t, layout))

    def append_uint(self, i: int) -> None:
        """Append a non-negative integer in base 10."""
        if i < 0:
            raise OverflowError(f"unsigned value cannot be negative: {i}")
        self.append_string(str(int(i)))

    def append_bool(self, v: bool) -> None:
        """Append "true" or "false"."""
        self.append_string("true" if v else "false")

    def append_float(self, f: float, bit_size: int) -> None:
        """Append the shortest fixed-point form of a float; NaN and Inf are unquoted."""
        self.append_string(_format_float(f, bit_size))

    def write(self, bs: bytes) -> int:
        """Append raw bytes and return how many were written."""
        data = bytes(bs)
        self._bs += data
        self._grow()
        return len(data)

    def reset(self) -> None:
        """Empty the buffer, keeping its capacity."""
        self._bs.clear()

    def trim_newline(self) -> None:
        """Remove one trailing newline, if present."""
        if self._bs and self._bs[-1] == ord("\n"):
            del self._bs[-1]

    def free(self) -> None:
        """Return the buffer to its pool; it must not be used afterwards."""
        if self._pool is not None:
            self._pool.put(self)

    def to_bytes(self) -> bytes:
        """Return a copy of the contents."""
        return bytes(self._bs)

    def capacity(self) -> int:
        """Return the current capacity."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._bs)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self._bs.decode("utf-8", errors="replace")