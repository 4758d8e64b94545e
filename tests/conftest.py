"""Shared fixtures for doo tests."""

from __future__ import annotations

import json
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop loguru sinks added during a test (e.g. by the CLI)."""
    yield
    logger.remove()


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def doo_home(temp_project: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point DOO_HOME at a temporary directory."""
    home = temp_project / ".doo"
    home.mkdir()
    monkeypatch.setenv("DOO_HOME", str(home))
    return home


@pytest.fixture
def sample_list_data() -> dict:
    """Sample list document."""
    return {
        "name": "Groceries",
        "list": [
            {"label": "milk", "complete": False},
            {"label": "eggs", "complete": True},
            {"label": "bread", "complete": False},
        ],
    }


@pytest.fixture
def sample_list_file(temp_project: Path, sample_list_data: dict) -> Path:
    """Write the sample list to groceries.json."""
    path = temp_project / "groceries.json"
    path.write_text(json.dumps(sample_list_data))
    return path
