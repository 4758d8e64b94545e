"""Fixed-capacity buffer of deleted items, most recent first."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

from doo.errors import UndoBufferFullError

T = TypeVar("T")

DEFAULT_UNDO_CAPACITY = 5


class BoundedUndoBuffer(Generic[T]):
    """Holds up to ``capacity`` removed items for later restoring.

    A push into a full buffer is refused rather than evicting the oldest
    entry, so only the first ``capacity`` deletions since the last restore
    or clear can be undone.
    """

    def __init__(self, capacity: int = DEFAULT_UNDO_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Undo capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: deque[T] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        """Iterate from most recent to oldest."""
        return iter(self._entries)

    def push(self, item: T) -> None:
        """Record ``item`` as the most recent entry.

        Raises:
            UndoBufferFullError: If the buffer already holds ``capacity`` entries.
        """
        if self.is_full():
            raise UndoBufferFullError(self._capacity)
        self._entries.appendleft(item)

    def pop_front(self) -> T | None:
        """Remove and return the most recent entry, or None if empty."""
        if not self._entries:
            return None
        return self._entries.popleft()

    def peek(self) -> T | None:
        """Return the most recent entry without removing it."""
        if not self._entries:
            return None
        return self._entries[0]

    def clear(self) -> None:
        self._entries.clear()

    def is_full(self) -> bool:
        return len(self._entries) >= self._capacity
