# swiftlog

Building blocks for structured logging: strongly typed log fields, lazy
array and error marshalers, reusable byte buffers, a clock abstraction and
a registry of named encoder constructors. It has no runtime dependencies.

## Fields

A `Field` (in `swiftlog.field`) pairs a key with a typed value. Its
`type` is a `FieldType` member; the value is held in `integer`, `string`
or `interface` depending on the type.

```python
from swiftlog import field

fields = [
    field.string("url", "http://example.com/"),
    field.int_("attempt", 3),
    field.bool_("retry", True),
    field.float64("ratio", 0.5),
    field.namespace("request"),
]
```

Integer constructors (`int8` … `int64`, `uint8` … `uint64`, `uintptr`)
raise `OverflowError` for values outside their range. Most scalar
constructors return an explicit nil field (a `reflect` field holding
`None`) when given `None`. `field.time_` stores times that fit in 64-bit
Unix nanoseconds compactly and others whole; `field.duration` takes a
`timedelta`. `field.object_` and `field.inline` require a value with a
`marshal_log_object` method.

`field.skip()` returns a no-op field, and `field.stack("stacktrace")` or
`field.stack_skip(key, skip)` captures the current call stack as a string
field.

`swiftlog.convert.any_(key, value)` picks the most specific field for an
arbitrary value (marshalers, bools, ints, floats, complex numbers, strings,
bytes, times, durations, exceptions and homogeneous lists or tuples of
these), falling back to `reflect` when nothing more specific applies.

## Arrays

`swiftlog.array` builds fields that carry sequences. Each is backed by a
`SliceMarshaler`, which on `marshal_log_array(arr)` calls the matching
`append_*` method of the given array encoder once per element:

```python
from swiftlog import array

array.ints("ids", [1, 2, 3])
array.strings("tags", ["a", "b"])
```

`array.array(key, val)` accepts any object with a `marshal_log_array`
method.

## Errors

```python
from swiftlog import error

error.error(ValueError("bad input"))          # stored under "error"
error.named_error("cause", KeyError("x"))
error.errors("failures", [ValueError("a"), None, ValueError("b")])
```

Passing `None` to `error` or `named_error` yields a no-op field. In
`errors`, `None` entries are skipped and every other exception is
marshaled as an object with an `"error"` key, plus an `"errorVerbose"`
key holding the formatted traceback when the exception has one.

## Buffers

`swiftlog.buffer.pool.Pool` hands out reusable
`swiftlog.buffer.buffer.Buffer` objects that support appending bytes,
strings, integers, floats, booleans and timestamps:

```python
from swiftlog.buffer.pool import Pool

pool = Pool()
buf = pool.get()
buf.append_string("count=")
buf.append_int(42)
print(buf.to_bytes())   # b"count=42"
buf.free()              # give it back to the pool
```

`append_time(t, layout)` takes a strftime layout or one of the
`RFC3339` / `RFC3339_NANO` names from `swiftlog.buffer.buffer`.
`append_float(f, bit_size)` writes the shortest fixed-point form for 32-
or 64-bit precision.

## Encoders

`swiftlog.encoder.EncoderRegistry` maps names to constructors that take an
encoder config. `register_encoder(name, constructor)` and
`new_encoder(name, encoder_config)` use a shared registry, which starts
empty. Registering an empty or already taken name raises `EncoderError`
(`NoEncoderNameError` for the empty name), as does building an unknown
name or a config that has a `time_key` but no `encode_time`.

## Clocks

`swiftlog.clock.SystemClock().now()` returns the current local time as an
aware `datetime`. Subclass `Clock` to control timestamps, for example in
tests.

## What this package does not do

There is no logger, no concrete JSON or console encoder, no output sinks
or files, no configuration presets, no sampling and no global logger.
The registry only stores constructors you register yourself.

## Running the tests

```
pip install -e ".[test]"
pytest
```