"""Ordered container with a single selected index.

Both the todo list and the recent files ledger are built on
SelectableSequence, so the selection repair rules live in one place:

- ``selection`` is None exactly when the sequence is empty.
- A non-None selection always points at an existing item.
- Appending selects the appended item.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from doo.errors import OutOfRangeError

T = TypeVar("T")


class SelectableSequence(Generic[T]):
    """A list of items with at most one selected index."""

    def __init__(self, items: Iterable[T] | None = None) -> None:
        self._items: list[T] = list(items) if items is not None else []
        self._selection: int | None = 0 if self._items else None

    @property
    def items(self) -> list[T]:
        """A copy of the items in order."""
        return list(self._items)

    @property
    def selection(self) -> int | None:
        """Index of the selected item, or None when empty."""
        return self._selection

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"SelectableSequence(items={self._items!r}, selection={self._selection!r})"

    # -------------------- insertion --------------------

    def insert_at_end(self, item: T) -> None:
        """Append an item and select it."""
        self._items.append(item)
        self._selection = len(self._items) - 1

    def insert_at_front(self, item: T, select: bool = False) -> None:
        """Insert an item at index 0.

        The current selection keeps pointing at the same item unless
        ``select`` is set, in which case index 0 becomes selected.
        """
        self._items.insert(0, item)
        if select or self._selection is None:
            self._selection = 0
        else:
            self._selection += 1

    # -------------------- removal --------------------

    def remove_selected(self) -> T | None:
        """Remove and return the selected item, or None if nothing is selected.

        Afterwards the selection stays on the same index, which now holds the
        removed item's successor. Removing the last item moves the selection
        back by one; emptying the sequence clears it.
        """
        if self._selection is None:
            return None
        return self.remove_at(self._selection)

    def remove_at(self, index: int) -> T:
        """Remove and return the item at ``index``, repairing the selection."""
        if not 0 <= index < len(self._items):
            raise OutOfRangeError(index, len(self._items))

        item = self._items.pop(index)

        if not self._items:
            self._selection = None
        elif self._selection is not None:
            if index < self._selection:
                self._selection -= 1
            elif index == self._selection and index == len(self._items):
                self._selection = index - 1

        return item

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()
        self._selection = None

    # -------------------- navigation --------------------

    def move_next(self) -> None:
        """Select the following item, stopping at the last one."""
        if not self._items:
            return
        if self._selection is None:
            self._selection = 0
        elif self._selection < len(self._items) - 1:
            self._selection += 1

    def move_previous(self) -> None:
        """Select the preceding item, stopping at the first one."""
        if not self._items:
            return
        if self._selection is None:
            self._selection = 0
        elif self._selection > 0:
            self._selection -= 1

    def select_at(self, index: int) -> None:
        """Select ``index`` directly.

        Raises:
            OutOfRangeError: If ``index`` does not name an item.
        """
        if not 0 <= index < len(self._items):
            raise OutOfRangeError(index, len(self._items))
        self._selection = index

    def selected(self) -> T | None:
        """Return the selected item (mutable in place), or None."""
        if self._selection is None:
            return None
        return self._items[self._selection]

    def index_of(self, item: T) -> int | None:
        """Return the index of the first item equal to ``item``, or None."""
        for i, existing in enumerate(self._items):
            if existing == item:
                return i
        return None
