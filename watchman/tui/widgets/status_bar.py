"""Status bar widget for environment readiness."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widgets import Static


def _badge(label: str, state: str) -> str:
    palette = {
        "ok": "green",
        "warn": "yellow",
        "error": "red",
        "unknown": "grey66",
    }
    color = palette.get(state, "grey66")
    return f"[{color}]●[/{color}] {label}"


class StatusBar(Static):
    """Compact badges for the external tools and clipboard backend."""

    nmap_state = reactive("unknown")
    whois_state = reactive("unknown")
    clipboard_state = reactive("unknown")

    def set_states(
        self,
        *,
        nmap: str,
        whois: str,
        clipboard: str,
    ) -> None:
        self.nmap_state = nmap
        self.whois_state = whois
        self.clipboard_state = clipboard

    def _badge_line(self) -> str:
        parts = [
            _badge("nmap", self.nmap_state),
            _badge("whois", self.whois_state),
            _badge("Clipboard", self.clipboard_state),
        ]
        return "   ".join(parts)

    def on_mount(self) -> None:
        self.update(self._badge_line())

    def watch_nmap_state(self) -> None:
        self.update(self._badge_line())

    def watch_whois_state(self) -> None:
        self.update(self._badge_line())

    def watch_clipboard_state(self) -> None:
        self.update(self._badge_line())
