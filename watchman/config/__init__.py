"""Configuration management for The Watchman."""
