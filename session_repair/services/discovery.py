"""
Session discovery service - finds transcript files under the Claude directory.

Resolves what a user types on the command line (a session ID prefix or a
path) to exactly one transcript file, and lists recent sessions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from session_repair.config import settings
from session_repair.exceptions import AmbiguousSessionError, SessionNotFoundError
from session_repair.paths import SESSION_SUFFIX, is_agent_file, projects_dir, transcripts_dir
from session_repair.schemas.operations.discovery import SessionFileInfo

__all__ = ['SessionDiscoveryService']


def _looks_like_path(target: str) -> bool:
    return target.endswith(SESSION_SUFFIX) or '/' in target


def _iter_session_files(directory: Path) -> list[Path]:
    """Main-session JSONL files directly inside `directory` (agent files excluded)."""
    if not directory.is_dir():
        return []
    return [f for f in directory.iterdir() if f.suffix == SESSION_SUFFIX and f.is_file() and not is_agent_file(f)]


class SessionDiscoveryService:
    """
    Service for discovering session transcripts.

    Searches `<claude_dir>/projects/<hash>/` and `<claude_dir>/transcripts/`.
    """

    def __init__(self, claude_dir: Path | None = None) -> None:
        """Initialize discovery service (claude_dir defaults to settings.CLAUDE_DIR)."""
        self.claude_dir = claude_dir or settings.CLAUDE_DIR

    def _project_session_files(self) -> list[Path]:
        root = projects_dir(self.claude_dir)
        if not root.is_dir():
            return []
        files: list[Path] = []
        for project in sorted(root.iterdir()):
            files.extend(_iter_session_files(project))
        return files

    def find_session_files(self, prefix: str) -> list[Path]:
        """
        Find transcripts whose session ID starts with `prefix`.

        Returns:
            Matching paths, newest first, one per session ID
        """
        candidates = self._project_session_files() + _iter_session_files(transcripts_dir(self.claude_dir))

        seen: set[str] = set()
        matches: list[tuple[float, Path]] = []
        for path in candidates:
            session_id = path.stem
            if not session_id.startswith(prefix) or session_id in seen:
                continue
            try:
                mtime = path.stat().st_mtime
            except OSError:
                continue
            seen.add(session_id)
            matches.append((mtime, path))

        matches.sort(key=lambda m: m[0], reverse=True)
        return [path for _, path in matches]

    def resolve(self, target: str) -> Path:
        """
        Resolve a path or session ID prefix to a single transcript file.

        Args:
            target: Path to a .jsonl file, or a session ID (prefix)

        Returns:
            Path to the transcript

        Raises:
            SessionNotFoundError: If nothing matches
            AmbiguousSessionError: If a prefix matches several sessions
        """
        if _looks_like_path(target):
            path = Path(target).expanduser()
            if not path.is_file():
                raise SessionNotFoundError(target)
            return path

        matches = self.find_session_files(target)
        if not matches:
            raise SessionNotFoundError(target)
        if len(matches) > 1:
            exact = [m for m in matches if m.stem == target]
            if len(exact) == 1:
                return exact[0]
            raise AmbiguousSessionError(target, matches)
        return matches[0]

    def list_sessions(self, limit: int = 10) -> list[SessionFileInfo]:
        """
        List recent sessions under projects/, newest first.

        Args:
            limit: Maximum number of sessions returned

        Returns:
            Session info with size, modification time and non-blank line count
        """
        sessions: list[SessionFileInfo] = []
        for path in self._project_session_files():
            try:
                stat = path.stat()
                with open(path, encoding='utf-8', errors='replace') as f:
                    entry_count = sum(1 for line in f if line.strip())
            except OSError:
                continue
            sessions.append(
                SessionFileInfo(
                    session_id=path.stem,
                    path=str(path),
                    size_bytes=stat.st_size,
                    modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
                    entry_count=entry_count,
                )
            )

        sessions.sort(key=lambda s: s.modified, reverse=True)
        return sessions[:limit]
