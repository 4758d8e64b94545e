"""Most-recently-used ledger of opened list files."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from doo.errors import StoreError
from doo.models import RecentFilesDocument
from doo.selection import SelectableSequence
from doo.store import write_atomic

DEFAULT_RECENT_CAPACITY = 5


class RecencyLedger:
    """Deduplicated, capacity-bound list of file paths, newest first.

    Recording a path that is already present moves it to the front instead
    of adding a second copy; recording a new path when full drops the
    oldest one. The selection is only used for browsing the history.
    """

    def __init__(self, capacity: int = DEFAULT_RECENT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Recent files capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._order: SelectableSequence[str] = SelectableSequence()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def paths(self) -> list[str]:
        return self._order.items

    @property
    def selection(self) -> int | None:
        return self._order.selection

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, path: object) -> bool:
        return self._order.index_of(path) is not None  # type: ignore[arg-type]

    def record(self, path: str) -> None:
        """Mark ``path`` as the most recently used file."""
        existing = self._order.index_of(path)
        if existing is not None:
            self._order.remove_at(existing)

        if len(self._order) >= self._capacity:
            evicted = self._order.remove_at(len(self._order) - 1)
            logger.debug("Evicted {} from recent files", evicted)

        self._order.insert_at_front(path, select=True)

    def most_recent(self) -> str | None:
        if not self._order:
            return None
        return self._order[0]

    def browse_next(self) -> None:
        self._order.move_next()

    def browse_previous(self) -> None:
        self._order.move_previous()

    def select_current(self) -> str | None:
        """Return the highlighted path and promote it to the front."""
        path = self._order.selected()
        if path is not None:
            self.record(path)
        return path

    def clear(self) -> None:
        self._order.clear()

    # -------------------- persistence --------------------

    @classmethod
    def load(cls, path: Path, capacity: int = DEFAULT_RECENT_CAPACITY) -> RecencyLedger:
        """Load the ledger from file, or return an empty one.

        A file that cannot be read or parsed is logged and ignored. When the
        loaded ledger has entries the most recent one is selected.
        """
        ledger = cls(capacity)
        if not path.exists():
            return ledger

        # ValueError covers malformed JSON, undecodable bytes and failed validation.
        try:
            with open(path) as f:
                data = json.load(f)
            document = RecentFilesDocument.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable recent files list {}: {}", path, e)
            return ledger

        # Append oldest-first so the file's first entry ends up at the front.
        kept: list[str] = []
        for entry in document.items:
            if entry not in kept:
                kept.append(entry)
        for entry in reversed(kept[:capacity]):
            ledger.record(entry)
        return ledger

    def save(self, path: Path) -> None:
        """Save the ledger to file.

        Raises:
            StoreError: If the file cannot be written.
        """
        document = RecentFilesDocument(items=self.paths, capacity=self._capacity)
        try:
            write_atomic(path, json.dumps(document.model_dump(), indent=2).encode("utf-8"))
        except OSError as e:
            raise StoreError(path, f"Cannot write recent files ({e.strerror})") from e
