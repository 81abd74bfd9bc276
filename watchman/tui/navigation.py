"""Typed key-hint registry for each session mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .session import Mode


@dataclass(frozen=True)
class ModeHint:
    """Footer copy shown while the session is in ``mode``."""

    mode: Mode
    label: str
    footer: str


MODE_HINTS: Tuple[ModeHint, ...] = (
    ModeHint(Mode.MENU, "Menu", "↑/↓: Navigate • Enter: Select • ?: Help • q: Quit"),
    ModeHint(Mode.COLLECTING_TARGET, "Target", "Enter: Continue • Esc: Back to menu"),
    ModeHint(Mode.COLLECTING_PARAMETER, "Parameter", "Enter: Continue • Esc: Back to menu"),
    ModeHint(Mode.RUNNING, "Running", "Please wait... • Esc: Cancel"),
    ModeHint(
        Mode.SHOWING_RESULT,
        "Result",
        "c: Copy to Clipboard • Enter/Esc: Back to menu",
    ),
)

MODE_HINT_MAP: Dict[Mode, ModeHint] = {hint.mode: hint for hint in MODE_HINTS}

HELP_FOOTER = "Press ? to close help"

HELP_SECTIONS: Tuple[Tuple[str, Tuple[Tuple[str, str], ...]], ...] = (
    (
        "Menu View",
        (
            ("↑/↓, j/k", "Navigate through scan options"),
            ("Enter", "Select a scan"),
            ("q", "Quit application"),
        ),
    ),
    (
        "Input View",
        (
            ("Enter", "Confirm and continue"),
            ("Esc", "Back to menu"),
        ),
    ),
    (
        "Running View",
        (("Esc", "Cancel the scan and return to the menu"),),
    ),
    (
        "Result View",
        (
            ("c", "Copy results to clipboard"),
            ("Enter/Esc", "Back to menu"),
        ),
    ),
    (
        "Global",
        (
            ("?, F1", "Toggle this help"),
            ("Ctrl+C", "Force quit"),
        ),
    ),
)
