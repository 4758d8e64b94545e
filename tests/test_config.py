"""Tests for doo.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from doo.config import DooConfig, HistoryConfig, LayoutConfig
from doo.config import doo_home as home_dir


class TestLayoutConfig:
    """Tests for LayoutConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        layout = LayoutConfig()
        assert layout.vertical == "center"
        assert layout.horizontal == "center"

    def test_invalid_alignment(self) -> None:
        """Test that unknown alignments are rejected."""
        with pytest.raises(Exception):
            LayoutConfig(vertical="sideways")  # type: ignore[arg-type]


class TestHistoryConfig:
    """Tests for HistoryConfig model."""

    def test_defaults(self) -> None:
        """Test default capacities."""
        history = HistoryConfig()
        assert history.undo_capacity == 5
        assert history.recent_capacity == 5

    @pytest.mark.parametrize("field", ["undo_capacity", "recent_capacity"])
    def test_capacity_must_be_positive(self, field: str) -> None:
        """Test zero capacities are rejected."""
        with pytest.raises(Exception):
            HistoryConfig(**{field: 0})


class TestDooConfig:
    """Tests for DooConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = DooConfig()
        assert config.new_item_label == "-- new task --"
        assert config.recent_files is None

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """Test loading returns defaults when file doesn't exist."""
        config = DooConfig.load(tmp_path / "config.json")
        assert config == DooConfig()

    def test_load_existing_file(self, tmp_path: Path) -> None:
        """Test loading from existing file."""
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "layout": {"vertical": "top", "horizontal": "left"},
                    "history": {"undo_capacity": 10},
                    "new_item_label": "todo",
                }
            )
        )
        config = DooConfig.load(path)
        assert config.layout.vertical == "top"
        assert config.history.undo_capacity == 10
        assert config.history.recent_capacity == 5
        assert config.new_item_label == "todo"

    def test_save_and_reload(self, tmp_path: Path) -> None:
        """Test save creates directories and round-trips."""
        path = tmp_path / "nested" / "config.json"
        config = DooConfig(history=HistoryConfig(recent_capacity=3))
        config.save(path)

        data = json.loads(path.read_text())
        assert "recent_files" not in data
        assert DooConfig.load(path).history.recent_capacity == 3

    def test_default_location_uses_doo_home(self, doo_home: Path) -> None:
        """Test the default config and ledger live under DOO_HOME."""
        (doo_home / "config.json").write_text(json.dumps({"new_item_label": "from home"}))
        config = DooConfig.load()
        assert config.new_item_label == "from home"
        assert config.recent_files_path() == doo_home / "recent_files.json"

    def test_recent_files_override(self, tmp_path: Path) -> None:
        """Test the ledger location can be overridden."""
        config = DooConfig(recent_files=str(tmp_path / "r.json"))
        assert config.recent_files_path() == tmp_path / "r.json"


class TestDooHome:
    """Tests for doo_home."""

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test DOO_HOME wins."""
        monkeypatch.setenv("DOO_HOME", str(tmp_path))
        assert home_dir() == tmp_path

    def test_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test ~/.doo is the fallback."""
        monkeypatch.delenv("DOO_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert home_dir() == tmp_path / ".doo"
