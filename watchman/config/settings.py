"""
Configuration management for The Watchman.
Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunnerSettings(BaseSettings):
    """External tool and local query settings."""

    nmap_binary: str = Field(default="nmap")
    whois_binary: str = Field(default="whois")
    sudo_binary: str = Field(default="sudo")
    # Seconds; 0 disables the timeout.
    timeout: float = Field(default=0.0, ge=0.0)
    public_ip_url: str = Field(default="https://ipapi.co/json/")
    http_timeout: float = Field(default=10.0, gt=0.0)

    model_config = SettingsConfigDict(env_prefix="WATCHMAN_RUNNER_")


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(default="INFO")
    file_path: Optional[str] = Field(default=None)

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="LOG_")


class UISettings(BaseSettings):
    """Terminal front-end settings."""

    tick_interval: float = Field(default=0.1, gt=0.0)
    compact_height: int = Field(default=30, ge=0)
    default: str = Field(default="textual")

    @field_validator("default")
    @classmethod
    def validate_runtime(cls, v):
        valid_runtimes = ["textual", "plain"]
        if v.lower() not in valid_runtimes:
            raise ValueError(f"UI runtime must be one of {valid_runtimes}")
        return v.lower()

    model_config = SettingsConfigDict(env_prefix="WATCHMAN_UI_")


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    app_name: str = Field(default="The Watchman")
    app_version: str = Field(default="1.0.0")

    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ui: UISettings = Field(default_factory=UISettings)

    model_config = SettingsConfigDict(
        env_prefix="WATCHMAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
