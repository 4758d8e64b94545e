"""Error types raised by the doo list engine and store."""

from __future__ import annotations

from pathlib import Path


class DooError(Exception):
    """Base class for recoverable doo errors."""


class NoSelectionError(DooError):
    """An operation needing a selected item ran with nothing selected."""

    def __init__(self, action: str = "this action") -> None:
        super().__init__(f"Nothing selected for {action}")
        self.action = action


class OutOfRangeError(DooError, IndexError):
    """An explicit selection index is outside the sequence."""

    def __init__(self, index: int, length: int) -> None:
        if length:
            message = f"Index {index} out of range (0-{length - 1})"
        else:
            message = f"Index {index} out of range (sequence is empty)"
        super().__init__(message)
        self.index = index
        self.length = length


class UndoBufferFullError(DooError):
    """The undo buffer is at capacity and cannot record another entry."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Undo buffer is full ({capacity} entries)")
        self.capacity = capacity


class StoreError(DooError):
    """Loading or saving a file failed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = str(path)
        self.reason = reason
