"""Domain-level shared models and registries."""

from .catalog import (
    ACTION_CATALOG,
    ACTION_MAP,
    ActionDescriptor,
    ActionKind,
    find_action,
    get_action,
    required_programs,
)

__all__ = [
    "ACTION_CATALOG",
    "ACTION_MAP",
    "ActionDescriptor",
    "ActionKind",
    "find_action",
    "get_action",
    "required_programs",
]
