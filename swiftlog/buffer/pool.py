"""A thread-safe pool of reusable buffers."""

from __future__ import annotations

import threading

from swiftlog.buffer.buffer import DEFAULT_SIZE, Buffer


class Pool:
    """Hands out empty Buffers and takes them back for reuse."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        self._size = size
        self._free: list[Buffer] = []
        self._lock = threading.Lock()

    def get(self) -> Buffer:
        """Return an empty buffer, reusing a freed one when available."""
        with self._lock:
            buf = self._free.pop() if self._free else None
        if buf is None:
            buf = Buffer(self._size, pool=self)
        buf.reset()
        return buf

    def put(self, buf: Buffer) -> None:
        """Give a buffer back to the pool."""
        with self._lock:
            self._free.append(buf)