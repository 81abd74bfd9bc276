"""Terminal front-end: session core and its Textual/console hosts."""

from .inputs import CollectedInputs, CollectionError, InputCollector, Prompt, PromptField
from .runs import RunCompleted, RunHandle, RunInProgressError, RunOrchestrator
from .session import (
    CollectingView,
    MenuView,
    Mode,
    ResultView,
    RunningView,
    SessionMachine,
    SessionState,
    StatusMessage,
    Viewport,
)

__all__ = [
    "CollectedInputs",
    "CollectingView",
    "CollectionError",
    "InputCollector",
    "MenuView",
    "Mode",
    "Prompt",
    "PromptField",
    "ResultView",
    "RunCompleted",
    "RunHandle",
    "RunInProgressError",
    "RunOrchestrator",
    "RunningView",
    "SessionMachine",
    "SessionState",
    "StatusMessage",
    "Viewport",
]
