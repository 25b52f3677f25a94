"""
Tests for transcript parsing and serialization.

Parsing must never lose a line: undecodable lines are carried through as raw
text, and untouched lines are written back byte for byte.
"""

from __future__ import annotations

import pytest

from session_repair.services.parser import parse_line, parse_transcript, serialize_transcript
from tests.factories import alternating, assistant, to_jsonl, user


def test_parses_records_in_file_order() -> None:
    lines = parse_transcript(to_jsonl(alternating(4)))

    assert [line.record.uuid for line in lines if line.record] == ['u0', 'a1', 'u2', 'a3']
    assert lines[1].record is not None
    assert lines[1].record.parentUuid == 'u0'
    assert lines[1].record.is_assistant


def test_blank_lines_are_skipped() -> None:
    text = to_jsonl([user('u0')]) + '\n   \n' + to_jsonl([assistant('a1', 'u0')]) + '\n'

    lines = parse_transcript(text)

    assert len(lines) == 2


def test_empty_content_yields_no_lines() -> None:
    assert parse_transcript('') == []
    assert parse_transcript('\n\n  \n') == []


@pytest.mark.parametrize(
    'raw',
    [
        'not json {',
        '[1, 2, 3]',
        '"just a string"',
        '{"uuid": "x"}',  # No type
        '{"type": "user", "uuid": 42}',  # Wrong field type
    ],
    ids=['invalid-json', 'array', 'string', 'missing-type', 'int-uuid'],
)
def test_undecodable_line_is_kept_raw(raw: str) -> None:
    line = parse_line(raw)

    assert line.record is None
    assert line.raw == raw


def test_unknown_fields_are_preserved_on_record() -> None:
    line = parse_line('{"type":"progress","uuid":"p1","data":{"step":3}}')

    assert line.record is not None
    assert line.record.type == 'progress'
    assert line.record.model_extra == {'data': {'step': 3}}


def test_round_trip_is_byte_identical() -> None:
    """Untouched lines keep their exact formatting, including key order and spacing."""
    text = (
        '{"type": "user", "uuid": "u0", "parentUuid": null, "message": {"content": "caf\\u00e9"}}\n'
        'garbage line\n'
        '{"parentUuid":"u0","type":"assistant","uuid":"a1"}\n'
    )

    assert serialize_transcript(parse_transcript(text)) == text


def test_crlf_line_endings_round_trip() -> None:
    text = '{"type":"user","uuid":"u0"}\r\n{"type":"assistant","uuid":"a1","parentUuid":"u0"}\r\n'

    lines = parse_transcript(text)

    assert [line.record.uuid for line in lines if line.record] == ['u0', 'a1']
    assert serialize_transcript(lines) == text


def test_reparent_keeps_key_order() -> None:
    line = parse_line('{"parentUuid":"old","type":"assistant","uuid":"a1","extra":1}')

    moved = line.with_parent('new')

    assert moved.raw == '{"parentUuid":"new","type":"assistant","uuid":"a1","extra":1}'
    assert moved.record is not None
    assert moved.record.parentUuid == 'new'
    assert line.record is not None
    assert line.record.parentUuid == 'old'


def test_reparent_undecodable_line_raises() -> None:
    with pytest.raises(ValueError):
        parse_line('not json').with_parent('x')


def test_deeply_nested_line_is_kept_raw() -> None:
    raw = '[' * 100_000 + ']' * 100_000

    line = parse_line(raw)

    assert line.record is None
    assert line.raw == raw


def test_reparent_keeps_crlf_ending() -> None:
    line = parse_line('{"parentUuid":"old","type":"assistant","uuid":"a1"}\r')

    assert line.with_parent('new').raw == '{"parentUuid":"new","type":"assistant","uuid":"a1"}\r'
