"""CLI interface for doo."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from doo import __version__
from doo.config import DooConfig, doo_home
from doo.errors import StoreError
from doo.logging_config import configure_logging
from doo.paths import resolve_path
from doo.render import render_help, render_list, render_recents
from doo.session import Action, Outcome, Screen, Session, parse_command

console = Console()

LEVEL_STYLES = {"info": "dim", "warning": "yellow", "error": "red"}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="doo")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: ~/.doo/config.json)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """doo - a small terminal todo list.

    \b
    Interactive usage:
      doo                    # Open the most recent list
      doo open shopping.json # Open (or start) a specific list

    \b
    One-shot edits:
      doo add shopping.json buy milk
      doo toggle shopping.json 1
      doo show shopping.json
    """
    configure_logging(verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = DooConfig.load(config_path)
    ctx.obj["config_path"] = config_path or doo_home() / "config.json"

    if ctx.invoked_subcommand is None:
        _run_interactive(Session(ctx.obj["config"]), None)


@main.command("open")
@click.argument("path", required=False)
@click.pass_context
def open_command(ctx: click.Context, path: str | None) -> None:
    """Open a list interactively (the most recent one if PATH is omitted)."""
    _run_interactive(Session(ctx.obj["config"]), path)


def _print_outcome(outcome: Outcome) -> None:
    if outcome.message:
        console.print(outcome.message, style=LEVEL_STYLES[outcome.level], markup=False)


def _draw(session: Session) -> None:
    layout = session.config.layout
    if session.screen is Screen.RECENTS:
        console.print(render_recents(session.ledger, layout))
    elif session.screen is Screen.HELP:
        console.print(render_help(layout))
    else:
        console.print(render_list(session.engine, layout))


def _prompt_label(default: str) -> str:
    return click.prompt("Label", default=default, show_default=False).strip() or default


def _handle_line(session: Session, line: str) -> Outcome:
    """Translate one line of input into a dispatched action."""
    if line.strip().startswith(":"):
        parsed = parse_command(line)
        if parsed is None:
            return Outcome("Unknown command. Type :help for help.", level="error")
        action, arg = parsed
        return session.dispatch(action, arg)

    action = session.action_for_key(line.strip())
    if action is None:
        return Outcome("Unknown key. Type :help for help.", level="error")

    if action is Action.ADD:
        return session.dispatch(action, _prompt_label(session.config.new_item_label))
    if action is Action.RELABEL:
        current = session.engine.selected()
        if current is None:
            return Outcome("Nothing selected for changing the label", level="error")
        return session.dispatch(action, _prompt_label(current.label))
    return session.dispatch(action)


def _run_interactive(session: Session, path: str | None) -> None:
    """Read-eval-draw loop over a session; persists recent files on exit."""
    outcome = session.start(path)
    try:
        while True:
            console.clear()
            _draw(session)
            _print_outcome(outcome)
            try:
                line = console.input("[bold cyan]doo>[/bold cyan] ")
            except (KeyboardInterrupt, EOFError):
                break
            outcome = _handle_line(session, line)
            if outcome.quit:
                _print_outcome(outcome)
                break
    finally:
        _close_quietly(session)


def _edit(ctx: click.Context, path: str, steps: list[tuple[Action, str | None]]) -> Session:
    """Open ``path``, apply ``steps`` and save, exiting non-zero on any error."""
    session = Session(ctx.obj["config"])
    outcome = session.start(path)
    for action, arg in [*steps, (Action.SAVE, None)]:
        if outcome.ok:
            outcome = session.dispatch(action, arg)
        if not outcome.ok:
            console.print(f"[red]{outcome.message}[/red]")
            ctx.exit(1)
        if outcome.level == "warning":
            _print_outcome(outcome)
    _close_quietly(session)
    return session


def _close_quietly(session: Session) -> None:
    try:
        session.close()
    except StoreError as e:
        console.print(f"[yellow]{e}[/yellow]")


def _index_step(index: int) -> tuple[Action, str | None]:
    return Action.SELECT, str(index)


@main.command()
@click.argument("path", required=False)
@click.pass_context
def show(ctx: click.Context, path: str | None) -> None:
    """Print a list (the most recent one if PATH is omitted)."""
    if path is not None and not Path(resolve_path(path)).exists():
        console.print(f"[red]File not found:[/red] {path}")
        ctx.exit(1)

    session = Session(ctx.obj["config"])
    outcome = session.start(path)
    if not outcome.ok:
        console.print(f"[red]{outcome.message}[/red]")
        ctx.exit(1)
    if session.engine.path is None:
        console.print("[dim]No recent lists.[/dim] Use [cyan]doo add FILE LABEL[/cyan] to start one.")
        return

    console.print(render_list(session.engine, session.config.layout))
    _close_quietly(session)


@main.command()
@click.argument("path")
@click.argument("label", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, path: str, label: tuple[str, ...]) -> None:
    """Append an item to a list, creating the file if needed."""
    text = " ".join(label)
    session = _edit(ctx, path, [(Action.ADD, text)])
    console.print(f"[green]Added:[/green] {text} [dim]({session.engine.path})[/dim]")


@main.command()
@click.argument("path")
@click.argument("index", type=int)
@click.pass_context
def toggle(ctx: click.Context, path: str, index: int) -> None:
    """Toggle completion of item INDEX (1-based)."""
    session = _edit(ctx, path, [_index_step(index), (Action.TOGGLE, None)])
    item = session.engine.selected()
    if item is not None:
        state = "[green]done[/green]" if item.complete else "[yellow]not done[/yellow]"
        console.print(f"{item.label}: {state}")


@main.command()
@click.argument("path")
@click.argument("index", type=int)
@click.argument("label", nargs=-1, required=True)
@click.pass_context
def relabel(ctx: click.Context, path: str, index: int, label: tuple[str, ...]) -> None:
    """Change the label of item INDEX (1-based)."""
    text = " ".join(label)
    _edit(ctx, path, [_index_step(index), (Action.RELABEL, text)])
    console.print(f"[green]Relabelled item {index}:[/green] {text}")


@main.command("rm")
@click.argument("path")
@click.argument("index", type=int)
@click.pass_context
def remove(ctx: click.Context, path: str, index: int) -> None:
    """Delete item INDEX (1-based)."""
    if not Path(resolve_path(path)).exists():
        console.print(f"[red]File not found:[/red] {path}")
        ctx.exit(1)
    _edit(ctx, path, [_index_step(index), (Action.DELETE, None)])
    console.print(f"[green]Removed item {index}.[/green]")


@main.command()
@click.argument("path")
@click.argument("name")
@click.pass_context
def rename(ctx: click.Context, path: str, name: str) -> None:
    """Set the display name of a list."""
    _edit(ctx, path, [(Action.RENAME, name)])
    console.print(f"[green]Renamed list to[/green] {name}")


@main.command()
@click.argument("path")
@click.option("--name", "-n", help="Display name for the new list")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def new(ctx: click.Context, path: str, name: str | None, force: bool) -> None:
    """Create an empty list at PATH."""
    session = Session(ctx.obj["config"])
    resolved = session.resolve(path)
    if Path(resolved).exists() and not force:
        console.print(f"[yellow]{resolved} already exists.[/yellow] Use --force to overwrite.")
        ctx.exit(1)

    steps: list[tuple[Action, str | None]] = [(Action.RESET, None)]
    if name:
        steps.append((Action.RENAME, name))
    steps.append((Action.SAVE, resolved))
    for action, arg in steps:
        outcome = session.dispatch(action, arg)
        if not outcome.ok:
            console.print(f"[red]{outcome.message}[/red]")
            ctx.exit(1)
    _close_quietly(session)
    console.print(f"[green]Created[/green] {resolved}")


@main.command()
@click.option("--clear", is_flag=True, help="Forget all recent files")
@click.pass_context
def recent(ctx: click.Context, clear: bool) -> None:
    """List recently opened files, newest first."""
    session = Session(ctx.obj["config"])

    if clear:
        session.ledger.clear()
        _close_quietly(session)
        console.print("[green]Cleared recent files.[/green]")
        return

    if not len(session.ledger):
        console.print("[dim]No recent files.[/dim]")
        return

    for i, path in enumerate(session.ledger.paths, 1):
        missing = "" if Path(path).exists() else " [dim](missing)[/dim]"
        console.print(f"  {i}. [cyan]{path}[/cyan]{missing}")


@main.command("config")
@click.option("--write", is_flag=True, help="Write the effective configuration to the config file")
@click.pass_context
def config_command(ctx: click.Context, write: bool) -> None:
    """Show the effective configuration, or save it with --write."""
    config: DooConfig = ctx.obj["config"]
    config_path: Path = ctx.obj["config_path"]

    if write:
        config.save(config_path)
        console.print(f"[green]Wrote[/green] {config_path}")
        return

    table = Table(title="Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Home", str(doo_home()))
    table.add_row("Config file", str(config_path))
    table.add_row("Recent files", str(config.recent_files_path()))
    table.add_row("Undo capacity", str(config.history.undo_capacity))
    table.add_row("Recent capacity", str(config.history.recent_capacity))
    table.add_row("New item label", config.new_item_label)
    table.add_row("Layout", f"{config.layout.vertical} / {config.layout.horizontal}")

    console.print(table)


if __name__ == "__main__":
    main()
