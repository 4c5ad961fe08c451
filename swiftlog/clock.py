"""Sources of time for logged entries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """A source of time for logged entries."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local time."""


class SystemClock(Clock):
    """A clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now().astimezone()