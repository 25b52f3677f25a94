#!/usr/bin/env python3
"""
Command-line interface for session-repair.

Provides commands to insert rewind bookmarks into dead session transcripts
and to list recent sessions.

WARNING: Claude Code loading repaired sessions as rewind points is UNVERIFIED.
Always test on a non-critical session first.
"""

from __future__ import annotations

from datetime import UTC, datetime

import typer

from session_repair.cli.logger import CLILogger
from session_repair.config import settings
from session_repair.exceptions import SessionResolutionError
from session_repair.schemas.operations.repair import RepairOptions, RepairResult
from session_repair.services.discovery import SessionDiscoveryService
from session_repair.services.repair import SessionRepairService

app = typer.Typer(
    name='session-repair',
    help='Insert rewind bookmarks into dead Claude Code session transcripts',
    add_completion=False,
    no_args_is_help=True,
)


def format_bytes(size: int) -> str:
    """Human-readable file size (B, KB, MB)."""
    if size < 1024:
        return f'{size}B'
    if size < 1024 * 1024:
        return f'{size / 1024:.1f}KB'
    return f'{size / (1024 * 1024):.1f}MB'


def format_age(modified: datetime, now: datetime | None = None) -> str:
    """Age as hours below one day, days otherwise."""
    now = now or datetime.now(UTC)
    hours = int((now - modified).total_seconds() // 3600)
    return f'{hours}h ago' if hours < 24 else f'{hours // 24}d ago'


def _print_result(result: RepairResult) -> None:
    if result.errors:
        typer.secho('Errors:', fg=typer.colors.RED, err=True)
        for error in result.errors:
            typer.secho(f'  ✘ {error}', fg=typer.colors.RED, err=True)

    for warning in result.warnings:
        typer.echo(f'  ⚠ {warning}')

    if result.inserted > 0 and not result.errors and not result.dry_run:
        typer.echo()
        typer.secho(f'Inserted {result.inserted} rewind points.', fg=typer.colors.GREEN)
        if result.backup_path:
            typer.echo(f'Backup: {result.backup_path}')


@app.command()
def repair(
    target: str = typer.Argument(..., help='Session ID prefix or path to a session .jsonl file'),
    dry_run: bool = typer.Option(False, '--dry-run', help='Preview break points without modifying the file'),
    interval: int | None = typer.Option(
        None, '--interval', min=1, help='Insert every N assistant entries (default from settings)'
    ),
    verify: bool = typer.Option(True, '--verify/--no-verify', help='Validate chain integrity before writing'),
    marker: str | None = typer.Option(None, '--marker', help='Bookmark marker text (default: ·)'),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Repair a session transcript by inserting synthetic rewind points."""
    logger = CLILogger(verbose=verbose)

    try:
        path = SessionDiscoveryService().resolve(target)
    except SessionResolutionError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    options = RepairOptions(
        interval=interval if interval is not None else settings.DEFAULT_INTERVAL,
        dry_run=dry_run,
        verify=verify,
        marker=marker or settings.DEFAULT_MARKER,
    )

    typer.echo(f'Repairing: {path}')
    typer.echo(f'Options: interval={options.interval}, dryRun={options.dry_run}, verify={options.verify}')
    typer.echo()

    result = SessionRepairService(logger=logger).repair(path, options)
    _print_result(result)

    raise typer.Exit(result.exit_code)


@app.command('list')
def list_sessions(
    recent: int = typer.Option(10, '--recent', '-n', min=1, help='Number of sessions to show'),
) -> None:
    """List recent sessions, newest first."""
    discovery = SessionDiscoveryService()
    sessions = discovery.list_sessions(limit=recent)

    if not sessions:
        typer.echo(f'No sessions found in {discovery.claude_dir / "projects"}')
        return

    typer.echo(f'Recent sessions ({len(sessions)}):')
    typer.echo()
    now = datetime.now(UTC)
    for s in sessions:
        size = format_bytes(s.size_bytes).rjust(8)
        count = str(s.entry_count).rjust(5)
        age = format_age(s.modified, now).rjust(8)
        typer.echo(f'  {s.session_id[:8]}  {size}  {count} entries  {age}')
        typer.echo(f'           {s.path}')


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == '__main__':
    main()
