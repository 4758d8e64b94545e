"""Interactive session state and action dispatch.

A Session ties together the list engine, the recent files ledger and the
configuration. Every user intent is an ``Action``; key presses and typed
commands are mapped onto actions by lookup tables, so nothing below the
CLI has to interpret strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

from loguru import logger

from doo.config import DooConfig
from doo.engine import ListEngine
from doo.errors import DooError
from doo.paths import resolve_path
from doo.recents import RecencyLedger
from doo.store import open_into, save_from


class Action(Enum):
    """Everything a user can ask a session to do."""

    ADD = "add"
    DELETE = "delete"
    RESTORE = "restore"
    TOGGLE = "toggle"
    RELABEL = "relabel"
    RENAME = "rename"
    RESET = "reset"
    NEXT = "next"
    PREVIOUS = "previous"
    SELECT = "select"
    SAVE = "save"
    SAVE_QUIT = "save_quit"
    OPEN = "open"
    OPEN_RECENT = "open_recent"
    SHOW_RECENTS = "show_recents"
    RECENT_NEXT = "recent_next"
    RECENT_PREVIOUS = "recent_previous"
    SELECT_RECENT = "select_recent"
    SHOW_PATH = "show_path"
    HELP = "help"
    BACK = "back"
    QUIT = "quit"


class Screen(Enum):
    LIST = "list"
    RECENTS = "recents"
    HELP = "help"


# Single-key bindings per screen.
KEYMAP: dict[Screen, dict[str, Action]] = {
    Screen.LIST: {
        "a": Action.ADD,
        "j": Action.NEXT,
        "k": Action.PREVIOUS,
        "x": Action.TOGGLE,
        "d": Action.DELETE,
        "u": Action.RESTORE,
        "i": Action.RELABEL,
        "q": Action.QUIT,
    },
    Screen.RECENTS: {
        "j": Action.RECENT_NEXT,
        "k": Action.RECENT_PREVIOUS,
        "": Action.SELECT_RECENT,
        "b": Action.BACK,
        "q": Action.QUIT,
    },
    Screen.HELP: {
        "": Action.BACK,
        "b": Action.BACK,
        "q": Action.QUIT,
    },
}

# Commands typed after ":".
COMMANDS: dict[str, Action] = {
    "save": Action.SAVE,
    "saveas": Action.SAVE,
    "w": Action.SAVE,
    "load": Action.OPEN,
    "e": Action.OPEN,
    "wq": Action.SAVE_QUIT,
    "new": Action.RESET,
    "rename": Action.RENAME,
    "help": Action.HELP,
    "recent": Action.SHOW_RECENTS,
    "path": Action.SHOW_PATH,
    "select": Action.SELECT,
    "q": Action.QUIT,
}

Level = Literal["info", "warning", "error"]


@dataclass
class Outcome:
    """Result of dispatching one action."""

    message: str | None = None
    level: Level = "info"
    quit: bool = False

    @property
    def ok(self) -> bool:
        return self.level != "error"


def parse_command(line: str) -> tuple[Action, str | None] | None:
    """Look up a ``:command [argument]`` line.

    Returns:
        The action and its (possibly empty) argument, or None if the command
        is unknown.
    """
    text = line.strip()
    if text.startswith(":"):
        text = text[1:]
    name, _, rest = text.partition(" ")
    action = COMMANDS.get(name.lower())
    if action is None:
        return None
    return action, rest.strip() or None


class Session:
    """One user's working state: the open list, its history and recent files."""

    def __init__(
        self,
        config: DooConfig,
        ledger_path: Path | None = None,
        engine: ListEngine | None = None,
        ledger: RecencyLedger | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.config = config
        self.ledger_path = ledger_path or config.recent_files_path()
        if engine is None:
            engine = ListEngine(undo_capacity=config.history.undo_capacity)
        self.engine = engine
        if ledger is None:
            ledger = RecencyLedger.load(self.ledger_path, config.history.recent_capacity)
        self.ledger = ledger
        self.cwd = cwd
        self.screen = Screen.LIST

    def resolve(self, raw: str) -> str:
        return resolve_path(raw, self.cwd)

    def start(self, path: str | None = None) -> Outcome:
        """Open ``path``, or the most recent file when no path is given.

        A path that does not exist yet starts an empty list bound to it, so
        the first save creates the file.
        """
        if path is None:
            if self.ledger.most_recent() is None:
                return Outcome()
            return self.dispatch(Action.OPEN_RECENT)

        resolved = self.resolve(path)
        if not Path(resolved).exists():
            self.engine.reset()
            self.engine.path = resolved
            return Outcome(f"New file {resolved}")
        return self.dispatch(Action.OPEN, resolved)

    def dispatch(self, action: Action, arg: str | None = None) -> Outcome:
        """Apply ``action`` and describe what happened.

        Recoverable errors become error-level outcomes and leave the session
        as it was, except that a failed SELECT_RECENT still promotes the
        chosen path in the ledger.
        """
        logger.debug("Dispatching {} ({!r})", action.value, arg)
        try:
            return self._apply(action, arg)
        except DooError as e:
            return Outcome(str(e), level="error")

    def _apply(self, action: Action, arg: str | None) -> Outcome:
        engine = self.engine

        if action is Action.ADD:
            item = engine.add(arg or self.config.new_item_label)
            return Outcome(f"Added {item.label!r}")

        if action is Action.DELETE:
            item = engine.delete_selected()
            if item is None:
                return Outcome("Nothing selected")
            if not engine.last_delete_recorded:
                return Outcome(
                    f"Deleted {item.label!r}; undo history is full so it cannot be restored",
                    level="warning",
                )
            return Outcome(f"Deleted {item.label!r}")

        if action is Action.RESTORE:
            item = engine.restore_last_deleted()
            if item is None:
                return Outcome("Nothing to restore")
            return Outcome(f"Restored {item.label!r}")

        if action is Action.TOGGLE:
            item = engine.toggle_complete_selected()
            state = "complete" if item.complete else "not complete"
            return Outcome(f"Marked {item.label!r} {state}")

        if action is Action.RELABEL:
            if arg is None:
                return Outcome("Label required", level="error")
            engine.relabel_selected(arg)
            return Outcome()

        if action is Action.RENAME:
            if arg is None:
                return Outcome("Name required", level="error")
            engine.rename_list(arg)
            return Outcome(f"Renamed list to {arg!r}")

        if action is Action.RESET:
            engine.reset()
            return Outcome("Started a new list")

        if action is Action.NEXT:
            engine.move_next()
            return Outcome()

        if action is Action.PREVIOUS:
            engine.move_previous()
            return Outcome()

        if action is Action.SELECT:
            if arg is None or not arg.isdigit():
                return Outcome("Item number required", level="error")
            engine.select_at(int(arg) - 1)
            return Outcome()

        if action is Action.SAVE:
            target = self.resolve(arg) if arg else None
            written = save_from(engine, self.ledger, target)
            return Outcome(f"Saved to {written}")

        if action is Action.SAVE_QUIT:
            written = save_from(engine, self.ledger)
            return Outcome(f"Saved to {written}", quit=True)

        if action is Action.OPEN:
            if arg is None:
                return Outcome("File path required", level="error")
            document = open_into(engine, self.ledger, self.resolve(arg))
            return Outcome(f"Opened {engine.path} ({len(document.items)} items)")

        if action is Action.OPEN_RECENT:
            recent = self.ledger.most_recent()
            if recent is None:
                return Outcome("No recent files")
            open_into(engine, self.ledger, recent)
            return Outcome(f"Opened {recent}")

        if action is Action.SHOW_RECENTS:
            self.screen = Screen.RECENTS
            return Outcome()

        if action is Action.RECENT_NEXT:
            self.ledger.browse_next()
            return Outcome()

        if action is Action.RECENT_PREVIOUS:
            self.ledger.browse_previous()
            return Outcome()

        if action is Action.SELECT_RECENT:
            path = self.ledger.select_current()
            if path is None:
                return Outcome("No recent files")
            open_into(engine, self.ledger, path)
            self.screen = Screen.LIST
            return Outcome(f"Opened {path}")

        if action is Action.SHOW_PATH:
            return Outcome(engine.path or "No file")

        if action is Action.HELP:
            self.screen = Screen.HELP
            return Outcome()

        if action is Action.BACK:
            self.screen = Screen.LIST
            return Outcome()

        if action is Action.QUIT:
            return Outcome(quit=True)

        raise ValueError(f"Unhandled action: {action}")

    def action_for_key(self, key: str) -> Action | None:
        """Look up a key binding on the current screen."""
        return KEYMAP[self.screen].get(key)

    def close(self) -> None:
        """Persist the recent files ledger.

        Raises:
            StoreError: If the ledger cannot be written.
        """
        self.ledger.save(self.ledger_path)
