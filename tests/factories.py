"""
Builders for synthetic transcript records used across the test suite.

Records are plain dicts shaped like real Claude Code JSONL entries. Times are
given in seconds after a fixed base instant so gaps are easy to read.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from session_repair.schemas.transcript import ParsedLine
from session_repair.services.parser import parse_transcript
from session_repair.timestamps import format_timestamp

BASE_TIME = datetime(2025, 1, 15, 10, 0, tzinfo=UTC)
SESSION_ID = 'session-test'


def ts(seconds: float) -> str:
    return format_timestamp(BASE_TIME + timedelta(seconds=seconds))


def record(
    type_: str,
    uuid: str,
    parent: str | None,
    seconds: float,
    **extra: Any,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        'parentUuid': parent,
        'isSidechain': False,
        'cwd': '/test',
        'sessionId': SESSION_ID,
        'version': '2.1.0',
        'type': type_,
        'uuid': uuid,
        'timestamp': ts(seconds),
    }
    data.update(extra)
    return data


def user(uuid: str, parent: str | None = None, seconds: float = 0, **extra: Any) -> dict[str, Any]:
    extra.setdefault('userType', 'external')
    extra.setdefault('message', {'role': 'user', 'content': 'hello'})
    return record('user', uuid, parent, seconds, **extra)


def assistant(uuid: str, parent: str | None, seconds: float = 0, **extra: Any) -> dict[str, Any]:
    extra.setdefault('message', {'role': 'assistant', 'content': [{'type': 'text', 'text': 'ok'}]})
    return record('assistant', uuid, parent, seconds, **extra)


def system(uuid: str, parent: str | None, seconds: float = 0, subtype: str = 'turn_duration') -> dict[str, Any]:
    return record('system', uuid, parent, seconds, subtype=subtype)


def alternating(count: int, start_seconds: float = 0, step: float = 1, prefix: str = '') -> list[dict[str, Any]]:
    """Linear chain u0, a1, u2, a3, ... with the first record as root."""
    records: list[dict[str, Any]] = []
    parent: str | None = None
    for i in range(count):
        if i % 2 == 0:
            rec = user(f'{prefix}u{i}', parent, start_seconds + i * step)
        else:
            rec = assistant(f'{prefix}a{i}', parent, start_seconds + i * step)
        records.append(rec)
        parent = rec['uuid']
    return records


def to_jsonl(records: Sequence[dict[str, Any] | str]) -> str:
    """Serialize records (dicts, or raw strings for malformed lines) to file text."""
    lines = [r if isinstance(r, str) else json.dumps(r, separators=(',', ':')) for r in records]
    return '\n'.join(lines) + '\n'


def parsed(records: Sequence[dict[str, Any] | str]) -> list[ParsedLine]:
    return parse_transcript(to_jsonl(records))
