"""Session metadata extraction - identity fields for synthetic records."""

from __future__ import annotations

from collections.abc import Sequence

from session_repair.exceptions import MissingMetadataError
from session_repair.schemas.transcript import ParsedLine, SessionMetadata

__all__ = ['extract_metadata']


def extract_metadata(lines: Sequence[ParsedLine]) -> SessionMetadata:
    """
    Extract session metadata from the first human record that has a sessionId.

    Args:
        lines: Parsed transcript lines in file order

    Returns:
        SessionMetadata (version defaults to '1', cwd to '')

    Raises:
        MissingMetadataError: If no human record carries a sessionId
    """
    for line in lines:
        record = line.record
        if record is None or not record.is_human or not record.sessionId:
            continue
        return SessionMetadata(
            session_id=record.sessionId,
            version=record.version or '1',
            cwd=record.cwd or '',
            git_branch=record.gitBranch or None,
            slug=record.slug or None,
        )

    raise MissingMetadataError()
