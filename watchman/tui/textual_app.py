"""Textual-based full-screen runtime for The Watchman."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import DataTable, Input, Static

from ..config.settings import settings
from ..domain.catalog import ACTION_CATALOG, ActionDescriptor
from ..services.clipboard import copy_to_clipboard
from ..services.runner import ActionRunner
from ..services.startup_checks import clipboard_state, collect_environment_warnings, tool_states
from .constants import SUBTITLE, TITLE as APP_TITLE
from .inputs import Prompt
from .logging import log_session_event
from .navigation import MODE_HINT_MAP
from .render import (
    render_body,
    render_collecting,
    render_footer,
    render_header,
    render_status,
    render_warnings,
)
from .runs import RunCompleted, RunOrchestrator
from .session import CollectingView, Copier, Mode, SessionMachine
from .widgets import Breadcrumb, StatusBar


class RunFinished(Message):
    """Posted on the app when the worker thread hands back a run."""

    def __init__(self, completed: RunCompleted) -> None:
        super().__init__()
        self.completed = completed


class WatchmanTextualApp(App[None]):
    """Interactive Textual runtime driving a ``SessionMachine``."""

    TITLE = APP_TITLE
    SUB_TITLE = SUBTITLE

    CSS = """
    Screen {
        padding: 0 1;
    }

    #banner {
        content-align: center middle;
        width: 100%;
    }

    #warnings {
        height: auto;
        text-align: center;
    }

    #menu {
        height: 1fr;
    }

    #prompt-input {
        width: 60;
    }

    #body-scroll {
        height: 1fr;
        border: round #00CED1;
        padding: 0 1;
    }

    #status-line, #footer-hints, #breadcrumb, #status-bar {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "force_quit", "Quit", show=False, priority=True),
        Binding("escape", "back", "Back", priority=True),
        Binding("f1", "toggle_help", "Help", show=False, priority=True),
        Binding("question_mark", "toggle_help", "Help"),
        Binding("q", "quit_session", "Quit"),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    def __init__(
        self,
        *,
        runner: Optional[ActionRunner] = None,
        catalog: Sequence[ActionDescriptor] = ACTION_CATALOG,
        copy: Copier = copy_to_clipboard,
        warnings: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__()
        if warnings is None:
            warnings = collect_environment_warnings()
        self._orchestrator = RunOrchestrator(runner or ActionRunner(), self._deliver_completion)
        self.machine = SessionMachine(
            catalog,
            self._orchestrator.start,
            copy=copy,
            warnings=warnings,
        )
        self._shown_prompt: Optional[Prompt] = None
        self._view_ready = False

    def compose(self) -> ComposeResult:
        yield Static(id="banner")
        yield Static(id="warnings")
        yield StatusBar(id="status-bar")
        yield Breadcrumb(id="breadcrumb")
        yield DataTable(id="menu", cursor_type="row")
        yield Static(id="prompt-copy")
        yield Input(id="prompt-input")
        with VerticalScroll(id="body-scroll"):
            yield Static(id="body")
        yield Static(id="status-line")
        yield Static(id="footer-hints")

    def on_mount(self) -> None:
        table = self.query_one("#menu", DataTable)
        table.add_columns("ID", "Name", "Description")
        for action in self.machine.catalog:
            table.add_row(str(action.id), action.name, action.description, key=str(action.id))

        states = tool_states()
        self.query_one("#status-bar", StatusBar).set_states(
            nmap=states.get("nmap", "unknown"),
            whois=states.get("whois", "unknown"),
            clipboard=clipboard_state(),
        )
        for warning in self.machine.state.warnings:
            self.notify(warning, title="Startup Check", severity="warning")

        self.machine.resize(self.size.width, self.size.height)
        self.set_interval(settings.ui.tick_interval, self._on_tick)
        log_session_event("session_started", ui="textual", warnings=len(self.machine.state.warnings))
        self._view_ready = True
        self._sync_view()

    def on_unmount(self) -> None:
        self._orchestrator.shutdown()

    # Event plumbing

    def _deliver_completion(self, completed: RunCompleted) -> None:
        self.post_message(RunFinished(completed))

    def on_run_finished(self, message: RunFinished) -> None:
        if self.machine.complete(message.completed):
            self._sync_view()

    def _on_tick(self) -> None:
        if self.machine.tick() and not self.machine.state.help_visible:
            self.query_one("#body", Static).update(
                render_body(self.machine.state, self.machine.catalog)
            )

    def on_resize(self, event: events.Resize) -> None:
        self.machine.resize(event.size.width, event.size.height)
        if self._view_ready:
            self._sync_view()

    @on(DataTable.RowSelected, "#menu")
    def _on_menu_selected(self, event: DataTable.RowSelected) -> None:
        if self.machine.state.help_visible:
            return
        self.machine.select_index(event.cursor_row)
        self._sync_view()

    @on(Input.Submitted, "#prompt-input")
    def _on_prompt_submitted(self, event: Input.Submitted) -> None:
        if self.machine.state.help_visible:
            return
        self.machine.submit(event.value)
        self._sync_view()

    def on_key(self, event: events.Key) -> None:
        state = self.machine.state
        if state.help_visible or state.mode is not Mode.SHOWING_RESULT:
            return
        if self.machine.handle_result_key(event.key):
            event.stop()
            self._sync_view()

    # Actions

    def action_back(self) -> None:
        state = self.machine.state
        if state.help_visible:
            self.machine.toggle_help()
        elif state.mode is Mode.SHOWING_RESULT:
            self.machine.acknowledge()
        else:
            self.machine.cancel()
        self._sync_view()

    def action_toggle_help(self) -> None:
        self.machine.toggle_help()
        self._sync_view()

    def action_quit_session(self) -> None:
        if self.machine.state.help_visible:
            return
        if self.machine.quit():
            self.exit()

    def action_force_quit(self) -> None:
        log_session_event("session_force_quit", mode=self.machine.state.mode.value)
        self.exit()

    def action_cursor_down(self) -> None:
        if self.machine.state.mode is Mode.MENU:
            self.query_one("#menu", DataTable).action_cursor_down()

    def action_cursor_up(self) -> None:
        if self.machine.state.mode is Mode.MENU:
            self.query_one("#menu", DataTable).action_cursor_up()

    # Rendering

    def _sync_view(self) -> None:
        """Show the widgets for the current mode and refresh their content."""
        state = self.machine.state
        catalog = self.machine.catalog
        compact_height = settings.ui.compact_height
        mode = state.mode
        help_visible = state.help_visible

        self.query_one("#banner", Static).update(render_header(state, compact_height))
        warnings = self.query_one("#warnings", Static)
        warnings.update(render_warnings(state))
        warnings.display = bool(state.warnings) and not help_visible

        action = state.selected_action
        self.query_one("#breadcrumb", Breadcrumb).set_path(
            "Menu",
            action.name if action else "",
            MODE_HINT_MAP[mode].label if mode is not Mode.MENU else "",
        )

        table = self.query_one("#menu", DataTable)
        prompt_copy = self.query_one("#prompt-copy", Static)
        prompt_input = self.query_one("#prompt-input", Input)
        body_scroll = self.query_one("#body-scroll", VerticalScroll)
        body = self.query_one("#body", Static)

        collecting = isinstance(state.view, CollectingView)
        table.display = mode is Mode.MENU and not help_visible
        prompt_copy.display = collecting and not help_visible
        prompt_input.display = collecting and not help_visible
        body_scroll.display = help_visible or mode in (Mode.RUNNING, Mode.SHOWING_RESULT)

        if isinstance(state.view, CollectingView):
            prompt_copy.update(render_collecting(state))
            if state.view.prompt != self._shown_prompt:
                self._shown_prompt = state.view.prompt
                prompt_input.value = ""
                prompt_input.placeholder = state.view.prompt.placeholder
        else:
            self._shown_prompt = None

        if body_scroll.display:
            body.update(render_body(state, catalog))
            if mode is Mode.SHOWING_RESULT and not help_visible:
                body_scroll.scroll_home(animate=False)

        self.query_one("#status-line", Static).update(render_status(state))
        self.query_one("#footer-hints", Static).update(render_footer(state))

        if table.display:
            table.focus()
        elif prompt_input.display:
            prompt_input.focus()
        else:
            body_scroll.focus()
