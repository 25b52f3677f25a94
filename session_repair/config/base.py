"""
Base configuration for session-repair.

Settings are read from SESSION_REPAIR_* environment variables, optionally
backed by a .env file named in LOAD_ENV_FILE.
"""

from __future__ import annotations

import os
import pathlib
from typing import TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

T = TypeVar('T', bound='RepairSettings')


class RepairSettings(pydantic_settings.BaseSettings):
    """Defaults for repair runs and session discovery."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix='SESSION_REPAIR_',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='forbid',  # Reject unknown keys in the .env file
    )

    # Application metadata
    APP_NAME: str = 'session-repair'
    VERSION: str = '0.1.0'

    # Where Claude Code keeps projects/ and transcripts/
    CLAUDE_DIR: pathlib.Path = pathlib.Path.home() / '.claude'

    # Repair defaults (overrideable per call via RepairOptions)
    DEFAULT_INTERVAL: int = 5  # Assistant records between interval break points
    DEFAULT_MARKER: str = '·'  # Middle dot
    TIME_GAP_SECONDS: float = 60.0

    BACKUP_SUFFIX: str = '.tav-backup'

    @pydantic.field_validator('DEFAULT_INTERVAL')
    @classmethod
    def validate_interval(cls, v: int) -> int:
        if v < 1:
            raise ValueError('DEFAULT_INTERVAL must be at least 1')
        return v

    @pydantic.field_validator('DEFAULT_MARKER', 'BACKUP_SUFFIX')
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError('must not be empty')
        return v

    @pydantic.field_validator('TIME_GAP_SECONDS')
    @classmethod
    def validate_time_gap(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('TIME_GAP_SECONDS must be positive')
        return v


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Factory for creating settings with dynamic .env file loading.

    LOAD_ENV_FILE environment variable specifies custom .env file path.
    When unset, loads from environment variables only.

    Args:
        settings_class: Settings class to instantiate
        env_file: Optional path to .env file (overrides LOAD_ENV_FILE)

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If specified .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class()  # No .env file, load from environment only

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)  # type: ignore[call-arg]


def lazy_settings(settings_class: type[T]) -> T:
    """
    Lazy settings - defers instantiation until first access.

    Args:
        settings_class: Settings class to instantiate

    Returns:
        Proxy that instantiates settings on first access
    """
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))  # type: ignore[no-any-return]
