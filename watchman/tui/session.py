"""Interactive session state machine.

The session is always in exactly one view:

* ``MenuView`` - browsing the catalog.
* ``CollectingView`` - answering the target or parameter prompt.
* ``RunningView`` - waiting for the action to finish.
* ``ResultView`` - reviewing the captured output.

Each view record carries only the data that is meaningful in that mode, so a
result can never linger in the menu and a menu can never have a selected
action. ``SessionMachine`` is the only writer of ``SessionState``; hosts feed
it one event at a time and re-render from ``machine.state`` afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Dict, Iterable, Optional, Protocol, Sequence, Tuple, Union

from ..domain.catalog import ActionDescriptor
from ..services.clipboard import copy_to_clipboard
from ..services.runner import RunOutcome
from .inputs import CollectedInputs, InputCollector, Prompt, PromptField
from .logging import log_session_event
from .runs import RunCompleted, RunInProgressError

DISMISS_KEYS = frozenset({"escape", "enter", "backspace"})
COPY_KEY = "c"


class Mode(str, Enum):
    MENU = "menu"
    COLLECTING_TARGET = "collecting_target"
    COLLECTING_PARAMETER = "collecting_parameter"
    RUNNING = "running"
    SHOWING_RESULT = "showing_result"


@dataclass(frozen=True)
class MenuView:
    mode: ClassVar[Mode] = Mode.MENU


@dataclass(frozen=True)
class CollectingView:
    action: ActionDescriptor
    prompt: Prompt
    target: str = ""

    @property
    def mode(self) -> Mode:
        if self.prompt.field is PromptField.TARGET:
            return Mode.COLLECTING_TARGET
        return Mode.COLLECTING_PARAMETER


@dataclass(frozen=True)
class RunningView:
    mode: ClassVar[Mode] = Mode.RUNNING

    action: ActionDescriptor
    target: str
    parameter: str
    generation: int


@dataclass(frozen=True)
class ResultView:
    mode: ClassVar[Mode] = Mode.SHOWING_RESULT

    action: ActionDescriptor
    target: str
    parameter: str
    result: RunOutcome


View = Union[MenuView, CollectingView, RunningView, ResultView]


@dataclass(frozen=True)
class StatusMessage:
    text: str
    level: str = "info"


@dataclass(frozen=True)
class Viewport:
    width: int = 80
    height: int = 24


@dataclass
class SessionState:
    """Everything the renderers need to draw a frame."""

    view: View = field(default_factory=MenuView)
    status: Optional[StatusMessage] = None
    viewport: Viewport = field(default_factory=Viewport)
    help_visible: bool = False
    warnings: Tuple[str, ...] = ()
    spinner_frame: int = 0
    finished: bool = False

    @property
    def mode(self) -> Mode:
        return self.view.mode

    @property
    def selected_action(self) -> Optional[ActionDescriptor]:
        return getattr(self.view, "action", None)

    @property
    def target_value(self) -> str:
        return getattr(self.view, "target", "")

    @property
    def parameter_value(self) -> str:
        return getattr(self.view, "parameter", "")

    @property
    def last_result(self) -> Optional[RunOutcome]:
        if isinstance(self.view, ResultView):
            return self.view.result
        return None


class CancellableRun(Protocol):
    generation: int
    waiting: bool

    def cancel(self) -> None: ...


RunStarter = Callable[[ActionDescriptor, str, str, int], CancellableRun]
Copier = Callable[[str], Tuple[bool, str]]


class SessionMachine:
    """Applies input and completion events to the session state.

    Every event method returns ``True`` when the event was applied and
    ``False`` when the current mode ignores it.
    """

    def __init__(
        self,
        catalog: Sequence[ActionDescriptor],
        start_run: RunStarter,
        *,
        copy: Copier = copy_to_clipboard,
        warnings: Iterable[str] = (),
        collector: Optional[InputCollector] = None,
    ) -> None:
        self.catalog: Tuple[ActionDescriptor, ...] = tuple(catalog)
        self._by_id: Dict[int, ActionDescriptor] = {action.id: action for action in self.catalog}
        self.state = SessionState(warnings=tuple(warnings))
        self._start_run = start_run
        self._copy = copy
        self._collector = collector or InputCollector()
        self._generation = 0
        self._handle: Optional[CancellableRun] = None

    @property
    def generation(self) -> int:
        return self._generation

    # Menu

    def select(self, action: ActionDescriptor) -> bool:
        if self.state.mode is not Mode.MENU:
            return False
        self.state.status = None
        log_session_event("action_selected", action_id=action.id, action=action.name)
        prompt = self._collector.begin(action)
        if prompt is None:
            return self._enter_running(action, CollectedInputs())
        self.state.view = CollectingView(action=action, prompt=prompt)
        return True

    def select_index(self, index: int) -> bool:
        """Select by zero-based catalog position (the menu cursor)."""
        if self.state.mode is not Mode.MENU:
            return False
        if not 0 <= index < len(self.catalog):
            self._reject_input(f"There is no option at position {index + 1}.")
            return False
        return self.select(self.catalog[index])

    def select_number(self, raw: str) -> bool:
        """Select by the action id shown in the menu; ``0`` quits."""
        if self.state.mode is not Mode.MENU:
            return False
        text = raw.strip()
        if text == "0":
            return self.quit()
        try:
            number = int(text)
        except ValueError:
            self._reject_input("That wasn't a valid option. Try one of the numbers above.")
            return False
        action = self._by_id.get(number)
        if action is None:
            self._reject_input("That wasn't a valid option. Try one of the numbers above.")
            return False
        return self.select(action)

    def quit(self) -> bool:
        if self.state.mode is not Mode.MENU:
            return False
        self.state.finished = True
        log_session_event("session_finished")
        return True

    # Input collection

    def submit(self, text: str) -> bool:
        view = self.state.view
        if not isinstance(view, CollectingView):
            return False
        result = self._collector.submit(text)
        if isinstance(result, Prompt):
            target = text.strip() if view.prompt.field is PromptField.TARGET else view.target
            self.state.view = CollectingView(action=view.action, prompt=result, target=target)
            return True
        return self._enter_running(view.action, result)

    def cancel(self) -> bool:
        view = self.state.view
        if isinstance(view, CollectingView):
            self._collector.cancel()
            log_session_event("collection_cancelled", action=view.action.name)
            self._reset_to_menu()
            return True
        if isinstance(view, RunningView):
            if self._handle is not None:
                self._handle.cancel()
            log_session_event(
                "run_cancelled", action=view.action.name, generation=view.generation
            )
            self._reset_to_menu()
            self.state.status = StatusMessage(f"Cancelled: {view.action.name}", "info")
            return True
        return False

    # Running

    def _enter_running(self, action: ActionDescriptor, inputs: CollectedInputs) -> bool:
        if self.state.mode is Mode.RUNNING:
            return False
        if action.requires_parameter:
            action = action.with_parameter(inputs.parameter)
        self._generation += 1
        generation = self._generation
        try:
            self._handle = self._start_run(action, inputs.target, inputs.parameter, generation)
        except RunInProgressError as exc:
            log_session_event("run_rejected", action=action.name, reason=str(exc))
            self._reset_to_menu()
            self.state.status = StatusMessage(str(exc), "error")
            return False
        self.state.view = RunningView(
            action=action,
            target=inputs.target,
            parameter=inputs.parameter,
            generation=generation,
        )
        self.state.spinner_frame = 0
        if self._handle.waiting:
            self.state.status = StatusMessage(
                "Waiting for the previous run to finish before starting...", "info"
            )
        else:
            self.state.status = StatusMessage("Running scan...", "info")
        log_session_event(
            "run_started",
            action=action.name,
            generation=generation,
            target=inputs.target,
            parameter=inputs.parameter,
        )
        return True

    def complete(self, event: RunCompleted) -> bool:
        view = self.state.view
        if not isinstance(view, RunningView) or event.generation != view.generation:
            log_session_event(
                "run_discarded",
                generation=event.generation,
                current_generation=self._generation,
            )
            return False
        self._handle = None
        self.state.view = ResultView(
            action=view.action,
            target=view.target,
            parameter=view.parameter,
            result=event.outcome,
        )
        if event.outcome.succeeded:
            self.state.status = StatusMessage(
                "Scan completed! Press 'c' to copy to clipboard", "success"
            )
        else:
            self.state.status = StatusMessage("Scan completed with errors", "error")
        log_session_event(
            "run_completed",
            action=view.action.name,
            generation=event.generation,
            succeeded=event.outcome.succeeded,
        )
        return True

    def tick(self) -> bool:
        if self.state.mode is not Mode.RUNNING:
            return False
        self.state.spinner_frame += 1
        return True

    # Result

    def copy_result(self) -> bool:
        view = self.state.view
        if not isinstance(view, ResultView):
            return False
        ok, message = self._copy(view.result.text)
        self.state.status = StatusMessage(message, "success" if ok else "error")
        log_session_event("result_copied", succeeded=ok)
        return True

    def acknowledge(self) -> bool:
        if not isinstance(self.state.view, ResultView):
            return False
        log_session_event("result_dismissed")
        self._reset_to_menu()
        return True

    def handle_result_key(self, key: str) -> bool:
        if key == COPY_KEY:
            return self.copy_result()
        if key in DISMISS_KEYS:
            return self.acknowledge()
        return False

    # Orthogonal

    def toggle_help(self) -> bool:
        self.state.help_visible = not self.state.help_visible
        return True

    def resize(self, width: int, height: int) -> bool:
        self.state.viewport = Viewport(width=max(0, width), height=max(0, height))
        return True

    def _reject_input(self, message: str) -> None:
        self.state.status = StatusMessage(message, "error")
        log_session_event("input_rejected", reason=message)

    def _reset_to_menu(self) -> None:
        self._collector.cancel()
        self._handle = None
        self.state.view = MenuView()
        self.state.status = None
