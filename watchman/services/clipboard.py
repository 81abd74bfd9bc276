"""Clipboard capability used by the result view."""

from __future__ import annotations

from typing import Tuple

import pyperclip
import structlog

from .error_mapper import map_exception
from .errors import ClipboardError

logger = structlog.get_logger(__name__)


def copy_to_clipboard(text: str) -> Tuple[bool, str]:
    """
    Copy text to the system clipboard.

    Returns:
        Tuple of (success, message) suitable for a transient status line.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        mapped = map_exception(ClipboardError(str(exc)))
        logger.warning("Clipboard copy failed", error=str(exc))
        return False, mapped.message
    return True, "✓ Copied to clipboard!"
