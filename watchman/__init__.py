"""The Watchman - interactive network diagnostics front-end."""

__version__ = "1.0.0"
