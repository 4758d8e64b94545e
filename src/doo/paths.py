"""Canonical path handling for list files."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_path(raw: str | Path, cwd: Path | None = None) -> str:
    """Turn a user-supplied path into a canonical absolute path string.

    ``~`` is expanded, relative paths are joined onto ``cwd`` (the process
    working directory by default) and ``.``/``..`` segments are collapsed
    lexically. Symlinks are left alone.

    Args:
        raw: Path as typed by the user
        cwd: Directory relative paths are resolved against

    Returns:
        Absolute, normalised path string
    """
    path = Path(os.path.expanduser(str(raw)))
    if not path.is_absolute():
        base = cwd if cwd is not None else Path.cwd()
        path = base / path
    return os.path.normpath(str(path))
