"""Shared Rich console for the line-oriented runtime and CLI output."""

from rich.console import Console

console = Console(highlight=False)
