"""Runtime facade for selecting and bootstrapping Watchman interfaces."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from ..domain.catalog import ACTION_CATALOG
from ..services.startup_checks import collect_environment_warnings
from .console import console


def run_tui(ui: str = "textual") -> None:
    """Run selected TUI runtime."""
    if ui == "plain":
        from .rich_app import WatchmanConsoleApp

        WatchmanConsoleApp().run()
        return

    from .textual_app import WatchmanTextualApp

    WatchmanTextualApp().run()


def list_actions() -> None:
    """Print the action catalog as a table."""
    table = Table(title="The Watchman - available actions")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Needs", style="dim")
    for action in ACTION_CATALOG:
        needs = []
        if action.requires_target:
            needs.append("target")
        if action.requires_parameter:
            needs.append("parameter")
        if action.elevated:
            needs.append("sudo")
        table.add_row(str(action.id), action.name, action.description, ", ".join(needs))
    console.print(table)


def check_environment() -> int:
    """Print missing-tool warnings; returns a process exit status."""
    warnings = collect_environment_warnings()
    if not warnings:
        console.print("[green]All external tools found.[/green]")
        return 0
    for warning in warnings:
        console.print(f"[yellow]{escape(warning)}[/yellow]", highlight=False)
    return 1
