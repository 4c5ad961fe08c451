"""Field constructors for exceptions."""

from __future__ import annotations

import traceback
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from swiftlog.array import array
from swiftlog.field import Field, FieldType, skip


def _require_error(err: Any) -> None:
    if not isinstance(err, BaseException):
        raise TypeError(f"expected an exception, got {type(err).__name__}")


def _add_error(enc: Any, key: str, err: BaseException) -> None:
    basic = str(err)
    enc.add_string(key, basic)
    if err.__traceback__ is not None:
        verbose = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        if verbose != basic:
            enc.add_string(key + "Verbose", verbose)


def error(err: BaseException | None) -> Field:
    """Return named_error("error", err)."""
    return named_error("error", err)


def named_error(key: str, err: BaseException | None) -> Field:
    """Return a field holding an exception under key; None gives a no-op field."""
    if err is None:
        return skip()
    _require_error(err)
    return Field(key=key, type=FieldType.ERROR, interface=err)


@dataclass(frozen=True)
class _ErrorElement:
    err: BaseException

    def marshal_log_object(self, enc: Any) -> None:
        _add_error(enc, "error", self.err)


@dataclass(frozen=True)
class ErrorArray:
    """Marshals each non-None exception as an object with an "error" key."""

    errs: tuple[BaseException | None, ...]

    def marshal_log_array(self, arr: Any) -> None:
        """Append one object per exception, skipping None entries."""
        for err in self.errs:
            if err is not None:
                arr.append_object(_ErrorElement(err))


def errors(key: str, errs: Iterable[BaseException | None]) -> Field:
    """Return a field carrying a sequence of exceptions."""
    values = tuple(errs)
    for err in values:
        if err is not None:
            _require_error(err)
    return array(key, ErrorArray(values))