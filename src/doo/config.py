"""Configuration models for doo."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


def doo_home() -> Path:
    """Directory holding doo's own files (``$DOO_HOME`` or ``~/.doo``)."""
    override = os.environ.get("DOO_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".doo"


class LayoutConfig(BaseModel):
    """Where the list panel sits in the terminal."""

    vertical: Literal["top", "center", "bottom"] = "center"
    horizontal: Literal["left", "center", "right"] = "center"


class HistoryConfig(BaseModel):
    """Sizes of the undo buffer and recent files ledger."""

    undo_capacity: int = Field(default=5, gt=0)
    recent_capacity: int = Field(default=5, gt=0)


class DooConfig(BaseModel):
    """Main configuration for doo."""

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    new_item_label: str = "-- new task --"
    recent_files: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> DooConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = doo_home() / "config.json"

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = doo_home() / "config.json"

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(exclude_none=True), f, indent=2)

    def recent_files_path(self) -> Path:
        """Location of the recent files ledger."""
        if self.recent_files:
            return Path(self.recent_files).expanduser()
        return doo_home() / "recent_files.json"
