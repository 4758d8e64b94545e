"""The todo list engine: items, selection and undoable deletion."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from doo.errors import NoSelectionError, UndoBufferFullError
from doo.models import Item
from doo.selection import SelectableSequence
from doo.undo import DEFAULT_UNDO_CAPACITY, BoundedUndoBuffer


class ListEngine:
    """Owns the active todo list and its deletion history.

    Deletion is best-effort with respect to undo: the item always leaves the
    list, but it is only recoverable while the undo buffer has room. After
    each deletion ``last_delete_recorded`` says whether the item made it
    into the buffer.
    """

    def __init__(
        self,
        undo_capacity: int = DEFAULT_UNDO_CAPACITY,
        name: str | None = None,
        path: str | None = None,
    ) -> None:
        self._sequence: SelectableSequence[Item] = SelectableSequence()
        self._undo: BoundedUndoBuffer[Item] = BoundedUndoBuffer(undo_capacity)
        self.name = name
        self.path = path
        self.last_delete_recorded = True

    # -------------------- queries --------------------

    @property
    def items(self) -> list[Item]:
        return self._sequence.items

    @property
    def selection(self) -> int | None:
        return self._sequence.selection

    @property
    def undo_depth(self) -> int:
        """Number of deletions that can currently be restored."""
        return len(self._undo)

    @property
    def undo_capacity(self) -> int:
        return self._undo.capacity

    def __len__(self) -> int:
        return len(self._sequence)

    def selected(self) -> Item | None:
        return self._sequence.selected()

    def can_restore(self) -> bool:
        return len(self._undo) > 0

    def next_restore(self) -> Item | None:
        """The item the next restore would bring back, if any."""
        return self._undo.peek()

    # -------------------- list operations --------------------

    def add(self, label: str) -> Item:
        """Append a new incomplete item and select it."""
        item = Item(label=label)
        self._sequence.insert_at_end(item)
        logger.debug("Added item {!r} at index {}", label, self._sequence.selection)
        return item

    def delete_selected(self) -> Item | None:
        """Remove the selected item and remember it for undo if there is room.

        Returns the removed item, or None when nothing was selected.
        """
        item = self._sequence.remove_selected()
        if item is None:
            return None

        try:
            self._undo.push(item)
        except UndoBufferFullError:
            self.last_delete_recorded = False
            logger.warning("Undo buffer full; deleted {!r} cannot be restored", item.label)
        else:
            self.last_delete_recorded = True
            logger.debug("Deleted {!r} ({} undoable)", item.label, len(self._undo))
        return item

    def restore_last_deleted(self) -> Item | None:
        """Re-insert the most recent deletion at the end of the list."""
        item = self._undo.pop_front()
        if item is not None:
            self._sequence.insert_at_end(item)
            logger.debug("Restored {!r}", item.label)
        return item

    def toggle_complete_selected(self) -> Item:
        """Flip completion on the selected item.

        Raises:
            NoSelectionError: If nothing is selected.
        """
        item = self._sequence.selected()
        if item is None:
            raise NoSelectionError("marking complete")
        item.toggle()
        return item

    def relabel_selected(self, new_label: str) -> Item:
        """Overwrite the selected item's label.

        Raises:
            NoSelectionError: If nothing is selected.
        """
        item = self._sequence.selected()
        if item is None:
            raise NoSelectionError("changing the label")
        item.relabel(new_label)
        return item

    def rename_list(self, new_name: str) -> None:
        self.name = new_name

    def reset(self) -> None:
        """Start a fresh, unnamed list. Deletions from the old list are forgotten."""
        self._sequence = SelectableSequence()
        self._undo.clear()
        self.name = None
        self.path = None
        self.last_delete_recorded = True

    def replace_contents(
        self,
        items: Iterable[Item],
        name: str | None = None,
        path: str | None = None,
    ) -> None:
        """Swap in a loaded list, selecting its first item.

        The undo buffer is kept: it belongs to the session, not the file.
        """
        self._sequence = SelectableSequence(items)
        self.name = name
        self.path = path

    # -------------------- navigation --------------------

    def move_next(self) -> None:
        self._sequence.move_next()

    def move_previous(self) -> None:
        self._sequence.move_previous()

    def select_at(self, index: int) -> None:
        self._sequence.select_at(index)
