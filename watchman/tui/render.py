"""Pure state-to-frame rendering shared by the Textual and console hosts.

Every function takes session state (plus the catalog and menu cursor where
needed) and returns Rich markup. Nothing here mutates state or performs I/O.
"""

from __future__ import annotations

from typing import List, Sequence

from rich.markup import escape

from ..domain.catalog import ActionDescriptor, ActionKind
from .constants import (
    BANNER,
    COLOR_ACCENT,
    COLOR_ERROR,
    COLOR_PRIMARY,
    COLOR_SECONDARY,
    COLOR_SUCCESS,
    COMPACT_HEADER,
    SPINNER_FRAMES,
    STATUS_COLORS,
)
from .navigation import HELP_FOOTER, HELP_SECTIONS, MODE_HINT_MAP
from .session import CollectingView, Mode, ResultView, RunningView, SessionState

DEFAULT_COMPACT_HEIGHT = 30


def is_compact(state: SessionState, compact_height: int = DEFAULT_COMPACT_HEIGHT) -> bool:
    return state.viewport.height < compact_height


def render_header(state: SessionState, compact_height: int = DEFAULT_COMPACT_HEIGHT) -> str:
    if is_compact(state, compact_height):
        return f"[bold {COLOR_PRIMARY}]{COMPACT_HEADER}[/]"
    return f"[{COLOR_PRIMARY}]{BANNER}[/]"


def render_warnings(state: SessionState) -> str:
    return "\n".join(f"[bold {COLOR_ERROR}]{escape(w)}[/]" for w in state.warnings)


def render_status(state: SessionState) -> str:
    if state.status is None:
        return ""
    color = STATUS_COLORS.get(state.status.level, COLOR_ACCENT)
    return f"[{color}]{escape(state.status.text)}[/]"


def render_footer(state: SessionState) -> str:
    if state.help_visible:
        text = HELP_FOOTER
    else:
        text = MODE_HINT_MAP[state.mode].footer
    return f"[{COLOR_SECONDARY}]{text}[/]"


def _badges(action: ActionDescriptor) -> str:
    badges = []
    if action.elevated:
        badges.append("[yellow]sudo[/yellow]")
    if action.kind is ActionKind.LOCAL_QUERY:
        badges.append("[cyan]local[/cyan]")
    return " ".join(badges)


def render_menu(
    state: SessionState,
    catalog: Sequence[ActionDescriptor],
    cursor: int = 0,
) -> str:
    lines: List[str] = []
    for index, action in enumerate(catalog):
        marker = "›" if index == cursor else " "
        name = escape(action.name).ljust(25)
        line = f"{marker}{action.id:>3}. {name} {escape(action.description)}"
        badges = _badges(action)
        if badges:
            line = f"{line} {badges}"
        if index == cursor:
            line = f"[bold]{line}[/bold]"
        lines.append(line)
    lines.append("    0. Exit")
    return "\n".join(lines)


def render_collecting(state: SessionState) -> str:
    view = state.view
    assert isinstance(view, CollectingView)
    lines = [
        f"[bold {COLOR_ACCENT}]Selected: {escape(view.action.name)} - "
        f"{escape(view.action.description)}[/]",
    ]
    if view.target:
        lines.append(f"[{COLOR_SECONDARY}]Target: {escape(view.target)}[/]")
    lines.append(escape(view.prompt.label))
    return "\n".join(lines)


def spinner_glyph(frame: int) -> str:
    return SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]


def render_running(state: SessionState) -> str:
    view = state.view
    assert isinstance(view, RunningView)
    lines = [
        f"[bold {COLOR_ACCENT}]{spinner_glyph(state.spinner_frame)} Running: "
        f"{escape(view.action.name)}[/]",
    ]
    if view.target:
        lines.append(f"[{COLOR_SECONDARY}]Target: {escape(view.target)}[/]")
    if view.parameter:
        lines.append(f"[{COLOR_SECONDARY}]Parameter: {escape(view.parameter)}[/]")
    return "\n".join(lines)


def render_result(state: SessionState) -> str:
    view = state.view
    assert isinstance(view, ResultView)
    if view.result.succeeded:
        indicator = f"[bold {COLOR_SUCCESS}]✔ Succeeded[/]"
    else:
        indicator = f"[bold {COLOR_ERROR}]✘ Failed[/]"
    heading = f"Scan: {escape(view.action.name)}"
    if view.target:
        heading += f" | Target: {escape(view.target)}"
    return "\n".join(
        [
            f"[bold {COLOR_ACCENT}]{heading}[/]",
            indicator,
            "",
            escape(view.result.text),
        ]
    )


def render_help() -> str:
    lines = [f"[bold {COLOR_ACCENT}]⌨ Keyboard Shortcuts[/]", ""]
    for section, bindings in HELP_SECTIONS:
        lines.append(f"[bold {COLOR_PRIMARY}]{section}[/]")
        for key, description in bindings:
            lines.append(f"    [{COLOR_ACCENT}]{escape(key)}[/] - [{COLOR_SECONDARY}]{description}[/]")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def render_body(
    state: SessionState,
    catalog: Sequence[ActionDescriptor],
    cursor: int = 0,
) -> str:
    """Main area of the frame: help overlay or the current mode's view."""
    if state.help_visible:
        return render_help()
    mode = state.mode
    if mode is Mode.MENU:
        return render_menu(state, catalog, cursor)
    if mode is Mode.RUNNING:
        return render_running(state)
    if mode is Mode.SHOWING_RESULT:
        return render_result(state)
    return render_collecting(state)


def render_frame(
    state: SessionState,
    catalog: Sequence[ActionDescriptor],
    cursor: int = 0,
    *,
    compact_height: int = DEFAULT_COMPACT_HEIGHT,
) -> str:
    """Full frame: header, warnings, body, status line and footer."""
    parts = [render_header(state, compact_height)]
    warnings = render_warnings(state)
    if warnings and not state.help_visible:
        parts.append(warnings)
    parts.append(render_body(state, catalog, cursor))
    status = render_status(state)
    if status and not state.help_visible:
        parts.append(status)
    parts.append(render_footer(state))
    separator = "\n" if is_compact(state, compact_height) else "\n\n"
    return separator.join(parts)
