"""
Transcript parser - JSONL text to ParsedLine and back.

Unlike a validating loader, parsing here never fails on an individual line:
anything that does not decode to a record is kept as raw text so that repair
of a file with incidental garbage loses nothing.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

import pydantic

from session_repair.schemas.transcript import ParsedLine, TranscriptRecord

__all__ = [
    'parse_line',
    'parse_transcript',
    'serialize_transcript',
]


def parse_line(raw: str) -> ParsedLine:
    """Decode one non-blank line. Undecodable lines come back with record=None."""
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        # JSONDecodeError, or nesting deeper than the decoder can recurse
        return ParsedLine(raw=raw)

    if not isinstance(data, dict):
        return ParsedLine(raw=raw)

    try:
        record = TranscriptRecord.model_validate(data)
    except pydantic.ValidationError:
        return ParsedLine(raw=raw)

    return ParsedLine(raw=raw, record=record)


def parse_transcript(content: str) -> list[ParsedLine]:
    """
    Parse transcript text into ParsedLines, in file order.

    Lines that are empty after trimming are skipped. A trailing carriage
    return is kept in `raw` so Windows line endings round-trip too.

    Args:
        content: Full file text

    Returns:
        One ParsedLine per non-blank line (empty list for an empty file)
    """
    return [parse_line(raw) for raw in content.split('\n') if raw.strip()]


def serialize_transcript(lines: Sequence[ParsedLine]) -> str:
    """Join raw lines back into file text with a trailing newline."""
    return '\n'.join(line.raw for line in lines) + '\n'
