"""
Discovery operation schemas.

Models for sessions found under the Claude directory.
"""

from __future__ import annotations

from datetime import datetime

from session_repair.schemas.types import BaseStrictModel


class SessionFileInfo(BaseStrictModel):
    """A session transcript on disk, as shown by `session-repair list`."""

    session_id: str
    path: str
    size_bytes: int
    modified: datetime
    entry_count: int  # Non-blank lines
