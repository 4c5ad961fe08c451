"""A registry of named encoder constructors."""

from __future__ import annotations

import threading
from typing import Any, Callable

EncoderConstructor = Callable[[Any], Any]


class EncoderError(ValueError):
    """Raised when an encoder cannot be registered or built."""


class NoEncoderNameError(EncoderError):
    """Raised when an empty encoder name is given."""

    def __init__(self) -> None:
        super().__init__("no encoder name specified")


class EncoderRegistry:
    """Maps encoder names to constructors taking an encoder config."""

    def __init__(self) -> None:
        self._constructors: dict[str, EncoderConstructor] = {}
        self._lock = threading.RLock()

    def register(self, name: str, constructor: EncoderConstructor) -> None:
        """Register constructor under name; a taken or empty name raises."""
        if not callable(constructor):
            raise TypeError("encoder constructor must be callable")
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            if name in self._constructors:
                raise EncoderError(f'encoder already registered for name "{name}"')
            self._constructors[name] = constructor

    def new(self, name: str, encoder_config: Any) -> Any:
        """Build the encoder registered under name from encoder_config."""
        if getattr(encoder_config, "time_key", "") and getattr(
            encoder_config, "encode_time", None
        ) is None:
            raise EncoderError("missing encode_time in encoder config")
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            constructor = self._constructors.get(name)
        if constructor is None:
            raise EncoderError(f'no encoder registered for name "{name}"')
        return constructor(encoder_config)

    def names(self) -> list[str]:
        """Return the registered names in sorted order."""
        with self._lock:
            return sorted(self._constructors)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._constructors


_registry = EncoderRegistry()


def register_encoder(name: str, constructor: EncoderConstructor) -> None:
    """Register an encoder constructor in the shared registry."""
    _registry.register(name, constructor)


def new_encoder(name: str, encoder_config: Any) -> Any:
    """Build an encoder from the shared registry."""
    return _registry.new(name, encoder_config)