"""Rich renderables for the doo screens. Rendering never mutates state."""

from __future__ import annotations

from jinja2 import BaseLoader, Environment
from rich.align import Align
from rich.console import RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from doo.config import LayoutConfig
from doo.engine import ListEngine
from doo.recents import RecencyLedger
from doo.session import COMMANDS, KEYMAP, Screen

HELP_TEMPLATE = """\
{% for screen, bindings in keymap -%}
{{ screen | upper }}
{% for key, action in bindings -%}
  {{ (key or "enter") | center(7) }} {{ action }}
{% endfor %}
{% endfor -%}
COMMANDS (type after ":")
{% for name, action in commands -%}
  :{{ name.ljust(8) }} {{ action }}
{% endfor %}"""

_env = Environment(loader=BaseLoader())


def render_help_text() -> str:
    """Render the help screen text from the key and command tables."""
    template = _env.from_string(HELP_TEMPLATE)
    return template.render(
        keymap=[
            (screen.value, [(key, action.value.replace("_", " ")) for key, action in keys.items()])
            for screen, keys in KEYMAP.items()
            if screen is not Screen.HELP
        ],
        commands=[(name, action.value.replace("_", " ")) for name, action in COMMANDS.items()],
    )


def _align(renderable: RenderableType, layout: LayoutConfig) -> RenderableType:
    vertical = "middle" if layout.vertical == "center" else layout.vertical
    return Align(renderable, align=layout.horizontal, vertical=vertical)


def render_list(engine: ListEngine, layout: LayoutConfig | None = None) -> RenderableType:
    """Build the list screen: one row per item, the selection highlighted."""
    layout = layout or LayoutConfig()
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Done", width=3)
    table.add_column("Label")

    for i, item in enumerate(engine.items):
        mark = "[green]✓[/green]" if item.complete else "[dim]○[/dim]"
        label = Text(item.label, style="strike dim" if item.complete else "")
        style = "reverse" if i == engine.selection else None
        table.add_row(str(i + 1), mark, label, style=style)

    if not engine.items:
        table.add_row("", "", Text("(empty)", style="dim"))

    title = engine.name or "doo"
    subtitle = engine.path or "unsaved"
    upcoming = engine.next_restore()
    if upcoming is not None:
        subtitle += f" · {engine.undo_depth} undoable, next {upcoming.label!r}"
    panel = Panel(table, title=f"[bold]{escape(title)}[/bold]", subtitle=f"[dim]{escape(subtitle)}[/dim]")
    return _align(panel, layout)


def render_recents(ledger: RecencyLedger, layout: LayoutConfig | None = None) -> RenderableType:
    """Build the recent files screen, newest first."""
    layout = layout or LayoutConfig()
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Path", style="cyan")

    for i, path in enumerate(ledger.paths):
        style = "reverse" if i == ledger.selection else None
        table.add_row(str(i + 1), path, style=style)

    if not len(ledger):
        table.add_row("", Text("No recent files", style="dim"))

    return _align(Panel(table, title="[bold]Recent files[/bold]"), layout)


def render_help(layout: LayoutConfig | None = None) -> RenderableType:
    layout = layout or LayoutConfig()
    return _align(Panel(render_help_text(), title="[bold]Help[/bold]"), layout)
