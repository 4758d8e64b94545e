"""Data models for doo lists and the recent files document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """A single todo entry."""

    label: str
    complete: bool = False

    def toggle(self) -> None:
        """Flip the completion flag."""
        self.complete = not self.complete

    def relabel(self, label: str) -> None:
        self.label = label

    def __str__(self) -> str:
        mark = "x" if self.complete else " "
        return f"[{mark}] {self.label}"


class ListDocument(BaseModel):
    """The on-disk shape of a todo list.

    Items are stored under the ``list`` key. Selection, backing path and
    undo history are runtime state and never written.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    items: list[Item] = Field(default_factory=list, alias="list")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialisation."""
        return self.model_dump(by_alias=True)


class RecentFilesDocument(BaseModel):
    """The on-disk shape of the recent files ledger."""

    items: list[str] = Field(default_factory=list)
    capacity: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> RecentFilesDocument:
        """Create from dictionary.

        Also accepts the older nested layout where paths lived under
        ``{"queue": {"items": [...], "capacity": n}}``.
        """
        if "queue" in data and isinstance(data["queue"], dict):
            data = data["queue"]
        return cls.model_validate(data)
