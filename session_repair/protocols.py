"""
Shared protocols for session-repair services.

This module contains Protocol definitions used across multiple services.
Having a single source of truth for protocols prevents type incompatibility
issues when the same protocol is defined in multiple modules.
"""

from __future__ import annotations

from typing import Protocol


class LoggerProtocol(Protocol):
    """
    Protocol for logger - enables services to work with any logging implementation.

    Repair runs synchronously from start to finish, so the methods are plain
    calls rather than coroutines.

    Implementations:
    - CLILogger (cli/logger.py): Logs to stdout with optional verbose mode
    - NullLogger (below): No-op implementation for when logging is optional
    """

    def info(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


class NullLogger:
    """
    No-op logger implementation for when logging is optional.

    Use this when a function requires a LoggerProtocol but the caller
    doesn't need logging output.
    """

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
