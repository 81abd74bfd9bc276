"""Shared Textual widgets for The Watchman."""

from .breadcrumb import Breadcrumb
from .status_bar import StatusBar

__all__ = ["Breadcrumb", "StatusBar"]
