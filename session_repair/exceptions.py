"""
Shared exceptions for session-repair.

Domain-specific exceptions used across services.

Exception Hierarchy:
    SessionRepairError (base)
    ├── SessionResolutionError (lookup/resolution failures)
    │   ├── SessionNotFoundError (no file matches the target)
    │   └── AmbiguousSessionError (prefix matches multiple sessions)
    └── RepairAbortedError (a pipeline stage halted the repair)
        ├── EmptyInputError
        ├── UnreadableFileError
        ├── MissingMetadataError
        ├── EmptyChainError
        ├── BackupFailedError
        ├── ValidationFailedError
        └── WriteFailedError

RepairAbortedError subclasses never escape SessionRepairService.repair();
they are converted into error strings on the RepairResult.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class SessionRepairError(Exception):
    """Base exception for all session-repair errors."""


class SessionResolutionError(SessionRepairError):
    """Base exception for session lookup and resolution failures."""


class SessionNotFoundError(SessionResolutionError):
    """Raised when no session file matches a path or session ID prefix."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f'No session found matching: {target}')


class AmbiguousSessionError(SessionResolutionError):
    """Raised when a session ID prefix matches multiple sessions."""

    def __init__(self, prefix: str, matches: Sequence[Path]) -> None:
        self.prefix = prefix
        self.matches = list(matches)
        lines = [f'{m.stem[:8]}  {m}' for m in self.matches[:10]]
        if len(self.matches) > 10:
            lines.append(f'... and {len(self.matches) - 10} more')
        matches_str = '\n  '.join(lines)
        super().__init__(
            f"Session ID prefix '{prefix}' is ambiguous. Matches {len(self.matches)} sessions:\n  {matches_str}\n\n"
            f'Provide a longer prefix or use the full path.'
        )


class RepairAbortedError(SessionRepairError):
    """Base exception for conditions that halt the repair pipeline."""

    condition = 'Aborted'


class EmptyInputError(RepairAbortedError):
    condition = 'EmptyInput'

    def __init__(self) -> None:
        super().__init__('File is empty')


class UnreadableFileError(RepairAbortedError):
    condition = 'UnreadableFile'

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'Cannot read file: {path}')


class MissingMetadataError(RepairAbortedError):
    """Raised when no human record carries session identity."""

    condition = 'MissingMetadata'

    def __init__(self) -> None:
        super().__init__('No user entry found - cannot extract session metadata')


class EmptyChainError(RepairAbortedError):
    condition = 'EmptyChain'

    def __init__(self) -> None:
        super().__init__('Cannot build parentUuid chain - no entries with uuid')


class BackupFailedError(RepairAbortedError):
    condition = 'BackupFailed'

    def __init__(self, backup_path: Path) -> None:
        self.backup_path = backup_path
        super().__init__(f'Cannot create backup: {backup_path}')


class ValidationFailedError(RepairAbortedError):
    """Raised when the rewritten record set fails integrity checks.

    This means the engine itself would have corrupted the chain. The target
    file is never written when this is raised.
    """

    condition = 'ValidationFailed'

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__(f'Validation failed with {len(self.errors)} error(s)')


class WriteFailedError(RepairAbortedError):
    condition = 'WriteFailed'

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'Cannot write repaired file: {path}')
