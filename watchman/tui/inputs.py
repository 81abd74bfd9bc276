"""Ordered free-text prompt collection preceding a run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from ..domain.catalog import ActionDescriptor
from ..services.errors import WatchmanError

TARGET_LABEL = "Provide a target (IP, Domain, or Range):"
TARGET_PLACEHOLDER = "Enter target (IP, Domain, or Range)"


class PromptField(str, Enum):
    TARGET = "target"
    PARAMETER = "parameter"


@dataclass(frozen=True)
class Prompt:
    """One pending free-text prompt."""

    field: PromptField
    label: str
    placeholder: str = ""


@dataclass(frozen=True)
class CollectedInputs:
    """Values gathered once every required prompt has been answered."""

    target: str = ""
    parameter: str = ""


class CollectionError(WatchmanError):
    """Raised when input is submitted with no collection in progress."""


def prompts_for(action: ActionDescriptor) -> List[Prompt]:
    """Required prompts for ``action``: target first, then parameter."""
    prompts: List[Prompt] = []
    if action.requires_target:
        prompts.append(Prompt(PromptField.TARGET, TARGET_LABEL, TARGET_PLACEHOLDER))
    if action.requires_parameter:
        prompts.append(
            Prompt(
                PromptField.PARAMETER,
                action.parameter_label or "Parameter:",
                action.parameter_placeholder,
            )
        )
    return prompts


class InputCollector:
    """Walks an action's required prompts in order.

    Values are stripped of surrounding whitespace and otherwise passed through
    untouched; target syntax is left for the invoked tool to reject.
    """

    def __init__(self) -> None:
        self._pending: List[Prompt] = []
        self._values: Dict[PromptField, str] = {}

    @property
    def active(self) -> bool:
        return bool(self._pending)

    @property
    def current(self) -> Optional[Prompt]:
        return self._pending[0] if self._pending else None

    def begin(self, action: ActionDescriptor) -> Optional[Prompt]:
        """Start collecting for ``action``; ``None`` means no input is needed."""
        self._pending = prompts_for(action)
        self._values = {}
        return self.current

    def submit(self, text: str) -> Union[Prompt, CollectedInputs]:
        if not self._pending:
            raise CollectionError("No input collection in progress")
        prompt = self._pending.pop(0)
        self._values[prompt.field] = text.strip()
        if self._pending:
            return self._pending[0]
        collected = CollectedInputs(
            target=self._values.get(PromptField.TARGET, ""),
            parameter=self._values.get(PromptField.PARAMETER, ""),
        )
        self._values = {}
        return collected

    def cancel(self) -> None:
        self._pending = []
        self._values = {}
