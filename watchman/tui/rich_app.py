"""Line-oriented Rich runtime - numbered menu, prompts and a spinner."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, Optional, Sequence

import questionary
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..config.settings import settings
from ..domain.catalog import ACTION_CATALOG, ActionDescriptor
from ..services.clipboard import copy_to_clipboard
from ..services.runner import ActionRunner
from ..services.startup_checks import collect_environment_warnings
from .console import console as default_console
from .logging import log_session_event
from .render import (
    render_body,
    render_footer,
    render_frame,
    render_header,
    render_status,
    render_warnings,
)
from .runs import RunCompleted, RunOrchestrator
from .session import COPY_KEY, CollectingView, Copier, ResultView, RunningView, SessionMachine

Asker = Callable[[str], Awaitable[Optional[str]]]

MENU_PROMPT = "What is your command?"
RESULT_PROMPT = "Done. Press Enter to return (c to copy):"


async def _text(message: str) -> Optional[str]:
    """questionary text input; ``None`` on Ctrl+C."""
    try:
        return await questionary.text(message).ask_async()
    except KeyboardInterrupt:
        return None


class WatchmanConsoleApp:
    """Runs the session machine against a plain scrolling terminal.

    Cancelling a run that is already in flight is not offered here; Ctrl+C at
    a prompt backs out of input collection or leaves the menu.
    """

    def __init__(
        self,
        *,
        runner: Optional[ActionRunner] = None,
        catalog: Sequence[ActionDescriptor] = ACTION_CATALOG,
        copy: Copier = copy_to_clipboard,
        warnings: Optional[Iterable[str]] = None,
        ask: Asker = _text,
        console: Optional[Console] = None,
    ) -> None:
        if warnings is None:
            warnings = collect_environment_warnings()
        self._completions: asyncio.Queue = asyncio.Queue()
        self._orchestrator = RunOrchestrator(
            runner or ActionRunner(), self._completions.put_nowait
        )
        self.machine = SessionMachine(
            catalog,
            self._orchestrator.start,
            copy=copy,
            warnings=warnings,
        )
        self._ask = ask
        self.console = console or default_console

    def run(self) -> None:
        asyncio.run(self.run_async())

    async def run_async(self) -> None:
        width, height = self.console.size
        self.machine.resize(width, height)
        log_session_event("session_started", ui="plain", warnings=len(self.machine.state.warnings))
        try:
            while not self.machine.state.finished:
                await self.step()
        finally:
            self._orchestrator.shutdown()
        self.console.print("Goodbye.")

    async def step(self) -> None:
        """Render, wait for one event and feed it to the machine."""
        state = self.machine.state
        if state.help_visible:
            self.console.print(render_body(state, self.machine.catalog))
            self.console.print(render_footer(state))
            await self._ask("")
            self.machine.toggle_help()
            return

        if isinstance(state.view, RunningView):
            await self._wait_for_run(state.view)
            return

        if isinstance(state.view, CollectingView):
            answer = await self._ask(state.view.prompt.label)
            if answer is None:
                self.machine.cancel()
            else:
                self.machine.submit(answer)
            return

        if isinstance(state.view, ResultView):
            self._print_result(state.view)
            answer = await self._ask(RESULT_PROMPT)
            while answer is not None and answer.strip().lower() == COPY_KEY:
                self.machine.copy_result()
                self.console.print(render_status(self.machine.state))
                answer = await self._ask(RESULT_PROMPT)
            self.machine.acknowledge()
            return

        self.console.print(
            render_frame(
                state,
                self.machine.catalog,
                cursor=-1,
                compact_height=settings.ui.compact_height,
            )
        )
        answer = await self._ask(MENU_PROMPT)
        self._dispatch_menu(answer)

    def _dispatch_menu(self, answer: Optional[str]) -> None:
        if answer is None:
            self.machine.quit()
            return
        command = answer.strip().lower()
        if command == "?":
            self.machine.toggle_help()
        elif command == "q":
            self.machine.quit()
        else:
            self.machine.select_number(command)

    async def _wait_for_run(self, view: RunningView) -> None:
        label = f"Running: {view.action.name}"
        if view.target:
            label += f" → {escape(view.target)}"
        with self.console.status(f"[bold green]{label}", spinner="dots"):
            while True:
                completed: RunCompleted = await self._completions.get()
                if self.machine.complete(completed):
                    return

    def _print_result(self, view: ResultView) -> None:
        state = self.machine.state
        border = "green" if view.result.succeeded else "red"
        title = "Succeeded" if view.result.succeeded else "Failed"
        self.console.print(render_header(state, settings.ui.compact_height))
        warnings = render_warnings(state)
        if warnings:
            self.console.print(warnings)
        self.console.print(
            Panel(
                Text(view.result.text.rstrip("\n") or "(no output)"),
                title=f"{view.action.name} - {title}",
                border_style=border,
            )
        )
        self.console.print(render_status(state))

