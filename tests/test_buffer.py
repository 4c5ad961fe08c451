from datetime import datetime, timedelta, timezone

import pytest

from swiftlog.buffer.buffer import DEFAULT_SIZE, RFC3339, RFC3339_NANO, Buffer
from swiftlog.buffer.pool import Pool

_POOL = Pool()
_DATE = datetime(2000, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "write, want",
    [
        (lambda b: b.append_byte(ord("v")), "v"),
        (lambda b: b.append_string("foo"), "foo"),
        (lambda b: b.append_int(42), "42"),
        (lambda b: b.append_int(-42), "-42"),
        (lambda b: b.append_uint(42), "42"),
        (lambda b: b.append_bool(True), "true"),
        (lambda b: b.append_float(3.14, 64), "3.14"),
        (lambda b: b.append_float(3.14, 32), "3.14"),
        (lambda b: b.write(b"foo"), "foo"),
        (lambda b: b.append_time(_DATE, RFC3339), "2000-01-02T03:04:05Z"),
    ],
    ids=[
        "AppendByte",
        "AppendString",
        "AppendIntPositive",
        "AppendIntNegative",
        "AppendUint",
        "AppendBool",
        "AppendFloat64",
        "AppendFloat32",
        "AppendWrite",
        "AppendTime",
    ],
)
def test_buffer_writes(write, want):
    buf = _POOL.get()
    buf.reset()
    write(buf)
    assert str(buf) == want
    assert buf.to_bytes().decode() == want
    assert len(buf) == len(want)
    assert buf.capacity() == DEFAULT_SIZE
    buf.free()


def test_write_returns_count():
    buf = Buffer()
    assert buf.write(b"hello") == 5
    assert buf.to_bytes() == b"hello"


def test_append_byte_accepts_single_bytes():
    buf = Buffer()
    buf.append_byte(b"x")
    assert str(buf) == "x"


def test_append_byte_out_of_range():
    with pytest.raises(ValueError):
        Buffer().append_byte(256)


def test_append_uint_rejects_negative():
    with pytest.raises(OverflowError):
        Buffer().append_uint(-1)


@pytest.mark.parametrize(
    "value, bits, want",
    [
        (float("nan"), 64, "NaN"),
        (float("inf"), 64, "+Inf"),
        (float("-inf"), 64, "-Inf"),
        (-0.0, 64, "-0"),
        (1.0, 64, "1"),
        (1e21, 64, "1000000000000000000000"),
        (1e39, 32, "+Inf"),
    ],
)
def test_append_float_special_forms(value, bits, want):
    buf = Buffer()
    buf.append_float(value, bits)
    assert str(buf) == want


def test_append_float_bad_bit_size():
    with pytest.raises(ValueError):
        Buffer().append_float(1.0, 16)


def test_append_time_with_offset():
    buf = Buffer()
    t = datetime(2000, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    buf.append_time(t, RFC3339)
    assert str(buf) == "2000-01-02T03:04:05+05:30"


def test_append_time_nano_trims_zeros():
    buf = Buffer()
    buf.append_time(_DATE.replace(microsecond=123000), RFC3339_NANO)
    assert str(buf) == "2000-01-02T03:04:05.123Z"


def test_append_time_strftime_layout():
    buf = Buffer()
    buf.append_time(_DATE, "%Y/%m/%d")
    assert str(buf) == "2000/01/02"


def test_trim_newline_removes_only_one():
    buf = Buffer()
    buf.append_string("a\n\n")
    buf.trim_newline()
    assert str(buf) == "a\n"
    buf.trim_newline()
    buf.trim_newline()
    assert str(buf) == "a"


def test_trim_newline_on_empty_buffer():
    buf = Buffer()
    buf.trim_newline()
    assert len(buf) == 0


def test_capacity_grows_with_content():
    buf = Buffer()
    buf.append_string("a" * (DEFAULT_SIZE * 2 + 1))
    assert buf.capacity() >= len(buf)


def test_reset_keeps_capacity():
    buf = Buffer()
    buf.append_string("abc")
    buf.reset()
    assert len(buf) == 0
    assert buf.capacity() == DEFAULT_SIZE