"""Startup validation helpers for required external tools."""

import os
import shutil
import sys
from typing import Dict, Iterable, List, Optional

from ..config.settings import settings
from ..domain.catalog import required_programs
from .error_mapper import INSTALL_COMMANDS
from .errors import StartupCheckError

_INSTALL_HINTS = {
    "nmap": f"You'll need it for most of these scans. ({INSTALL_COMMANDS['nmap']})",
    "whois": f"Whois lookups will fail until it is installed. ({INSTALL_COMMANDS['whois']})",
}

_CLIPBOARD_TOOLS = ("xclip", "xsel", "wl-copy")


def _configured_binary(program: str) -> str:
    binaries = {
        "nmap": settings.runner.nmap_binary,
        "whois": settings.runner.whois_binary,
    }
    return binaries.get(program, program)


def ensure_tool_available(program: str, binary: Optional[str] = None) -> str:
    """Return the resolved path of ``program`` or raise StartupCheckError."""
    executable = binary or _configured_binary(program)
    resolved = shutil.which(executable)
    if resolved is None:
        raise StartupCheckError(
            f"'{executable}' isn't in your PATH. {_INSTALL_HINTS.get(program, '')}".strip()
        )
    return resolved


def tool_states(programs: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """Map each required program to ``ok`` or ``error`` for status badges."""
    states: Dict[str, str] = {}
    for program in programs if programs is not None else required_programs():
        try:
            ensure_tool_available(program)
        except StartupCheckError:
            states[program] = "error"
        else:
            states[program] = "ok"
    return states


def collect_environment_warnings(programs: Optional[Iterable[str]] = None) -> List[str]:
    """Collect human-readable warnings for every missing external tool.

    Missing tools never block the session; the warnings are shown as a
    persistent banner and only the actions depending on the tool will fail.
    """
    warnings: List[str] = []
    for program in programs if programs is not None else required_programs():
        try:
            ensure_tool_available(program)
        except StartupCheckError as exc:
            warnings.append(f"⚠ Warning: {exc}")
    return warnings


def clipboard_state() -> str:
    """Best-effort guess whether a clipboard backend exists on this host."""
    if sys.platform.startswith("darwin") or os.name == "nt":
        return "ok"
    if any(shutil.which(tool) for tool in _CLIPBOARD_TOOLS):
        return "ok"
    return "warn"
