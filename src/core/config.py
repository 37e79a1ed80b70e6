"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (HTTP client, exporters) read settings consistently.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import typer
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Per-user configuration directory (platform convention, via click)."""

    return Path(typer.get_app_dir("stackexport"))


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing and validation at the edge (env vars) without cluttering the core.
    - A single configuration contract for the CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="STACKEXPORT_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://api.stackexchange.com/2.3",
        min_length=8,
        description="Base URL of the Stack Exchange REST API (versioned).",
    )
    default_site: str = Field(
        default="stackoverflow",
        min_length=1,
        description="Site queried when the input file does not name one.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="stackexport/0.1",
        min_length=1,
        description="User-Agent sent to the API.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Root log level when --verbose is not given.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


def load_settings(**overrides: Any) -> AppSettings:
    """Build `AppSettings`, reporting bad environment values as `ConfigError`."""

    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"STACKEXPORT_{'.'.join(str(p) for p in err.get('loc', ())).upper()}: {err.get('msg')}"
            for err in exc.errors()
        )
        raise ConfigError(f"invalid settings: {problems}") from exc
