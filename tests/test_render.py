"""Tests for doo.render module."""

from __future__ import annotations

from io import StringIO

from rich.console import Console, RenderableType

from doo.config import LayoutConfig
from doo.engine import ListEngine
from doo.recents import RecencyLedger
from doo.render import render_help, render_help_text, render_list, render_recents


def _to_text(renderable: RenderableType) -> str:
    console = Console(file=StringIO(), width=80, color_system=None)
    console.print(renderable)
    return console.file.getvalue()  # type: ignore[attr-defined]


class TestRenderList:
    """Tests for render_list."""

    def test_items_and_title(self) -> None:
        """Test labels, numbering and the list name appear."""
        engine = ListEngine(name="Chores")
        engine.add("sweep")
        engine.add("mop")
        engine.toggle_complete_selected()

        output = _to_text(render_list(engine))

        assert "Chores" in output
        assert "1" in output and "sweep" in output
        assert "mop" in output
        assert "✓" in output
        assert "unsaved" in output

    def test_empty_list(self) -> None:
        """Test an empty list shows a placeholder."""
        output = _to_text(render_list(ListEngine()))
        assert "(empty)" in output
        assert "doo" in output

    def test_undo_depth_in_subtitle(self) -> None:
        """Test the number of undoable deletions is shown."""
        engine = ListEngine(path="/tmp/x.json")
        engine.add("a")
        engine.add("b")
        engine.delete_selected()
        output = _to_text(render_list(engine, LayoutConfig(horizontal="left")))
        assert "1 undoable, next 'b'" in output
        assert "/tmp/x.json" in output

    def test_render_does_not_mutate(self) -> None:
        """Test rendering leaves the engine untouched."""
        engine = ListEngine()
        engine.add("a")
        engine.add("b")
        engine.select_at(0)
        _to_text(render_list(engine))
        assert engine.selection == 0
        assert len(engine) == 2


class TestRenderRecents:
    """Tests for render_recents."""

    def test_paths_listed(self) -> None:
        """Test recent paths are shown newest first."""
        ledger = RecencyLedger()
        ledger.record("/a.json")
        ledger.record("/b.json")
        output = _to_text(render_recents(ledger))
        assert output.index("/b.json") < output.index("/a.json")

    def test_empty(self) -> None:
        """Test the empty placeholder."""
        assert "No recent files" in _to_text(render_recents(RecencyLedger()))


class TestRenderHelp:
    """Tests for the help screen."""

    def test_help_text_lists_keys_and_commands(self) -> None:
        """Test bindings and commands come from the tables."""
        text = render_help_text()
        assert "LIST" in text
        assert "RECENTS" in text
        assert "restore" in text
        assert ":wq" in text
        assert "select recent" in text
        assert "enter" in text

    def test_help_panel(self) -> None:
        """Test the help panel renders."""
        assert "Help" in _to_text(render_help(LayoutConfig(vertical="top")))
