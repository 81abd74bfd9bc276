"""Centralized exception mapping for consistent user-facing errors."""

import os
import subprocess
from dataclasses import dataclass
from typing import Any

from .errors import ClipboardError

INSTALL_COMMANDS = {
    "nmap": "brew install nmap / pacman -S nmap",
    "whois": "brew install whois / apt install whois",
}


@dataclass(frozen=True)
class ErrorMapping:
    """Normalized user-facing error payload shown in the result and status views."""

    code: str
    message: str
    hint: str = ""

    def describe(self) -> str:
        return f"{self.message} {self.hint}".strip()


def _extract_message(error: Any) -> str:
    if error is None:
        return ""

    if isinstance(error, OSError) and error.strerror:
        filename = f": '{error.filename}'" if error.filename else ""
        return f"{error.strerror}{filename}"

    return str(error)


def _install_hint(error: Any) -> str:
    program = ""
    if isinstance(error, OSError) and error.filename:
        program = os.path.basename(str(error.filename))
    command = INSTALL_COMMANDS.get(program)
    if command:
        return f"Install {program} and make sure it is on your PATH ({command})."
    return "Install it and make sure it is on your PATH."


def map_exception(error: Any) -> ErrorMapping:
    """Map raw exceptions/messages into stable user-facing error semantics."""
    raw_message = _extract_message(error).strip()
    lowered = raw_message.lower()

    if isinstance(error, FileNotFoundError) or any(
        token in lowered for token in ("no such file", "command not found")
    ):
        return ErrorMapping(
            code="tool_missing",
            message=f"Required tool is not available ({raw_message}).",
            hint=_install_hint(error),
        )

    if isinstance(error, PermissionError) or any(
        token in lowered
        for token in ("permission denied", "operation not permitted", "requires root")
    ):
        return ErrorMapping(
            code="permission_denied",
            message="The action was refused for lack of privileges.",
            hint="Elevated actions run through sudo; check your sudo configuration.",
        )

    if isinstance(error, subprocess.TimeoutExpired) or any(
        token in lowered for token in ("timeout", "timed out")
    ):
        return ErrorMapping(
            code="run_timeout",
            message="The action did not finish before the configured timeout.",
            hint="Raise WATCHMAN_RUNNER_TIMEOUT or pick a narrower target.",
        )

    if any(token in lowered for token in ("rate limit", "too many requests", "429")):
        return ErrorMapping(
            code="rate_limited",
            message="The lookup service is rate limiting requests.",
            hint="Wait briefly, then retry.",
        )

    if any(
        token in lowered
        for token in (
            "connection",
            "refused",
            "unreachable",
            "name or service not known",
            "network",
        )
    ):
        return ErrorMapping(
            code="connection_error",
            message="Could not reach the remote service.",
            hint="Check your network connection and retry.",
        )

    if isinstance(error, ClipboardError) or "clipboard" in lowered or "copy/paste" in lowered:
        return ErrorMapping(
            code="clipboard_unavailable",
            message="Failed to copy to clipboard.",
            hint="Install xclip, xsel or wl-clipboard on Linux.",
        )

    return ErrorMapping(
        code="run_error",
        message=raw_message or "Action failed",
    )
