"""
Pydantic models for Claude Code transcript JSONL lines, as seen by repair.

Repair only reads structural fields. Everything else on a record (message
bodies, tool results, usage, thinking metadata) is carried through as extra
fields and never inspected.

Record types relevant to repair:
- user: human turns and tool results; synthetic bookmarks are user records
- assistant: model turns; a bookmark is only navigable when its child is one
- system: carries `subtype`; `turn_duration` marks the natural end of a turn,
  `compact_boundary` marks that everything before it was summarized upstream
- progress, file-history-snapshot: noise, present in the file but never
  interesting to repair

Round-trip serialization:
- Untouched lines are written back from ParsedLine.raw, byte for byte
- Lines created or modified by repair are encoded with encode_json_line()
  (compact separators, UTF-8 kept as-is) from a plain dict, so the original
  key order of a reparented record survives
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from session_repair.schemas.types import BaseStrictModel, PermissiveModel

__all__ = [
    'ASSISTANT',
    'COMPACT_BOUNDARY',
    'HUMAN',
    'SYSTEM',
    'TURN_DURATION',
    'ParsedLine',
    'SessionMetadata',
    'TranscriptRecord',
    'encode_json_line',
]

# ==============================================================================
# Record discriminators
# ==============================================================================

HUMAN = 'user'
ASSISTANT = 'assistant'
SYSTEM = 'system'

TURN_DURATION = 'turn_duration'
COMPACT_BOUNDARY = 'compact_boundary'


def encode_json_line(data: Mapping[str, Any]) -> str:
    """Encode a record dict as a single compact JSONL line (no trailing newline)."""
    return json.dumps(data, separators=(',', ':'), ensure_ascii=False)


# ==============================================================================
# Records
# ==============================================================================


class TranscriptRecord(PermissiveModel):
    """One line of a session transcript, typed only where repair needs it."""

    type: str
    uuid: str | None = None
    parentUuid: str | None = None
    subtype: str | None = None
    timestamp: str | None = None
    sessionId: str | None = None
    version: str | None = None
    cwd: str | None = None
    gitBranch: str | None = None
    slug: str | None = None
    message: Any = None

    @property
    def is_human(self) -> bool:
        return self.type == HUMAN

    @property
    def is_assistant(self) -> bool:
        return self.type == ASSISTANT

    @property
    def is_turn_boundary(self) -> bool:
        return self.type == SYSTEM and self.subtype == TURN_DURATION

    @property
    def is_compact_boundary(self) -> bool:
        return self.type == SYSTEM and self.subtype == COMPACT_BOUNDARY


class ParsedLine(BaseStrictModel):
    """
    A non-blank transcript line: its raw text, plus the decoded record if any.

    `record` is None when the line is not valid JSON or not a record object.
    Such lines are still written back verbatim.
    """

    raw: str
    record: TranscriptRecord | None = None

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> ParsedLine:
        """Build a line for a record created or modified by repair."""
        return cls(raw=encode_json_line(data), record=TranscriptRecord.model_validate(dict(data)))

    def with_parent(self, parent_uuid: str) -> ParsedLine:
        """Copy of this line with `parentUuid` rewritten, other keys in original order."""
        if self.record is None:
            raise ValueError('Cannot reparent an undecodable line')
        data = json.loads(self.raw)
        data['parentUuid'] = parent_uuid
        line = ParsedLine.from_data(data)
        if self.raw.endswith('\r'):
            return line.model_copy(update={'raw': line.raw + '\r'})
        return line


class SessionMetadata(BaseStrictModel):
    """Session identity copied onto every synthetic record."""

    session_id: str
    version: str
    cwd: str
    git_branch: str | None = None
    slug: str | None = None
