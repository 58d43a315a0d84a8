"""A bounded, thread-safe FIFO of image fragments."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

MAX_IMG_STRIP_SIZE = 10000


@dataclass(frozen=True)
class BufferEntry:
    """One fetched fragment: its bytes and its sequence number."""

    data: bytes
    sequence_num: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) > MAX_IMG_STRIP_SIZE:
            raise ValueError(
                f"fragment of {len(self.data)} bytes exceeds {MAX_IMG_STRIP_SIZE}"
            )

    @property
    def length(self) -> int:
        return len(self.data)


class CircularBuffer:
    """Fixed-capacity FIFO guarded by its own lock.

    Callers are expected to track free and filled slots themselves; adding
    to a full buffer is an error.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: deque[BufferEntry] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def add(self, entry: BufferEntry) -> None:
        """Append *entry*; raise :class:`IndexError` if the buffer is full."""
        with self._lock:
            if len(self._items) >= self._capacity:
                raise IndexError("circular buffer is full")
            self._items.append(entry)

    def get(self) -> BufferEntry | None:
        """Remove and return the oldest entry, or ``None`` if empty."""
        with self._lock:
            return self._items.popleft() if self._items else None