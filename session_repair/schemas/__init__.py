"""
Schema models for session-repair.

transcript.py holds the wire-format records read from session files;
operations/ holds the results returned by services.
"""

from __future__ import annotations

from session_repair.schemas.transcript import (
    ASSISTANT,
    COMPACT_BOUNDARY,
    HUMAN,
    SYSTEM,
    TURN_DURATION,
    ParsedLine,
    SessionMetadata,
    TranscriptRecord,
    encode_json_line,
)

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
