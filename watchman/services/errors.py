"""Exception hierarchy shared by services and the session core."""


class WatchmanError(Exception):
    """Base class for all Watchman errors."""


class RunnerError(WatchmanError):
    """Raised when an action cannot be executed at all."""


class StartupCheckError(WatchmanError, RuntimeError):
    """Raised when a runtime prerequisite is not met."""


class ClipboardError(WatchmanError):
    """Raised when the clipboard capability is unavailable."""
