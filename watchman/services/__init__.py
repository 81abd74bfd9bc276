"""Service layer: action execution, environment checks and clipboard access."""

from .clipboard import copy_to_clipboard
from .error_mapper import ErrorMapping, map_exception
from .errors import ClipboardError, RunnerError, StartupCheckError, WatchmanError
from .runner import ActionRunner, RunOutcome
from .startup_checks import collect_environment_warnings, ensure_tool_available

__all__ = [
    "ActionRunner",
    "ClipboardError",
    "ErrorMapping",
    "RunOutcome",
    "RunnerError",
    "StartupCheckError",
    "WatchmanError",
    "collect_environment_warnings",
    "copy_to_clipboard",
    "ensure_tool_available",
    "map_exception",
]
