"""
CLI logger adapter - implements LoggerProtocol for command-line usage.

Provides a simple logger that outputs to stdout/stderr for CLI commands.
"""

from __future__ import annotations

import typer


class CLILogger:
    """
    Logger implementation for CLI (implements LoggerProtocol from protocols).

    Info messages go to stdout only in verbose mode. Warnings and errors are
    left to the command's own result reporting, so they are shown here only
    in verbose mode as well, on stderr.
    """

    def __init__(self, verbose: bool = False) -> None:
        """
        Initialize CLI logger.

        Args:
            verbose: If True, show pipeline progress as it happens.
        """
        self.verbose = verbose

    def info(self, message: str) -> None:
        """Log info message (only if verbose)."""
        if self.verbose:
            typer.echo(f'[INFO] {message}')

    def warning(self, message: str) -> None:
        """Log warning message (only if verbose)."""
        if self.verbose:
            typer.echo(f'[WARNING] {message}', err=True)

    def error(self, message: str) -> None:
        """Log error message (only if verbose)."""
        if self.verbose:
            typer.echo(f'[ERROR] {message}', err=True)
