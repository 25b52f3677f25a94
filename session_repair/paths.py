"""
Path utilities for Claude Code session files.

Session transcripts live in two places under the Claude directory:
- `projects/<encoded-project-path>/<session-id>.jsonl` (one folder per project)
- `transcripts/<session-id>.jsonl` (flat)

Agent sidechain files (`agent-*.jsonl`) sit next to the main transcripts but
are never repair targets.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    'SESSION_SUFFIX',
    'backup_path_for',
    'is_agent_file',
    'projects_dir',
    'transcripts_dir',
]

SESSION_SUFFIX = '.jsonl'


def projects_dir(claude_dir: Path) -> Path:
    return claude_dir / 'projects'


def transcripts_dir(claude_dir: Path) -> Path:
    return claude_dir / 'transcripts'


def is_agent_file(path: Path) -> bool:
    return path.name.startswith('agent-')


def backup_path_for(path: Path, suffix: str) -> Path:
    """
    Backup location for a transcript: the same path with `suffix` appended.

    Examples:
        >>> backup_path_for(Path('/tmp/abc.jsonl'), '.tav-backup')
        PosixPath('/tmp/abc.jsonl.tav-backup')
    """
    return path.with_name(path.name + suffix)
