"""Breadcrumb widget showing where the operator is in the session."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widgets import Static


class Breadcrumb(Static):
    """Simple path breadcrumb that can be updated by the app."""

    _path = reactive("Menu")

    def set_path(self, *parts: str) -> None:
        self._path = " > ".join(part for part in parts if part) or "Menu"

    def watch__path(self, path: str) -> None:
        self.update(f"[dim]{path}[/dim]")

    def on_mount(self) -> None:
        self.update(f"[dim]{self._path}[/dim]")
