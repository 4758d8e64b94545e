"""JSON persistence for todo lists.

Lists are stored one per file. Saving goes through a temporary file and an
atomic rename so a failed save never leaves a half-written list behind, and
loading validates the whole document before anything in memory changes.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import ValidationError

from doo.errors import StoreError
from doo.models import ListDocument

if TYPE_CHECKING:
    from doo.engine import ListEngine
    from doo.recents import RecencyLedger


def serialize(engine: ListEngine) -> bytes:
    """Encode the persistent part of an engine's state."""
    document = ListDocument(name=engine.name, items=engine.items)
    return json.dumps(document.to_dict(), indent=2).encode("utf-8")


def deserialize(data: bytes | str) -> ListDocument:
    """Decode a list document.

    Raises:
        ValueError: If the data is not valid JSON or not a list document.
    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("expected a JSON object")
    try:
        return ListDocument.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"not a doo list: {e.error_count()} validation error(s)") from e


def write_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temporary sibling file and rename.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def load_list(path: str | Path) -> ListDocument:
    """Load a list document from disk.

    Raises:
        StoreError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise StoreError(path, "File not found")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise StoreError(path, f"Cannot read file ({e.strerror})") from e

    try:
        return deserialize(data)
    except ValueError as e:
        raise StoreError(path, f"Invalid list file ({e})") from e


def save_list(engine: ListEngine, path: str | Path) -> None:
    """Write the engine's list to ``path``.

    Raises:
        StoreError: If the file cannot be written. The existing file, if any,
            is left untouched.
    """
    path = Path(path)
    logger.debug("Saving list to {}", path)
    try:
        write_atomic(path, serialize(engine))
    except OSError as e:
        raise StoreError(path, f"Cannot write file ({e.strerror})") from e


def open_into(engine: ListEngine, ledger: RecencyLedger, path: str) -> ListDocument:
    """Load ``path`` into ``engine`` and record it as recently used.

    On failure neither the engine nor the ledger change.
    """
    document = load_list(path)
    engine.replace_contents(document.items, name=document.name, path=path)
    ledger.record(path)
    logger.debug("Opened {} ({} items)", path, len(document.items))
    return document


def save_from(engine: ListEngine, ledger: RecencyLedger, path: str | None = None) -> str:
    """Save ``engine`` to ``path`` or its backing path and record it.

    Returns:
        The path written to.

    Raises:
        StoreError: If there is no path to save to or the write fails.
    """
    target = path or engine.path
    if target is None:
        raise StoreError("(none)", "No file name; save with a path first")
    save_list(engine, target)
    engine.path = target
    ledger.record(target)
    return target
