"""
Tests for chain reconstruction.

The chain is the path from the last record with a uuid back to the root. It
skips sidechains, abandoned branches and noise records that sit between its
links in the file.
"""

from __future__ import annotations

import pytest

from session_repair.exceptions import EmptyChainError
from session_repair.services.chain import build_chain, find_last_compact_boundary
from tests.factories import alternating, assistant, parsed, system, user


def chain_uuids(records: list) -> list[str]:
    return [link.uuid for link in build_chain(parsed(records))]


def test_linear_chain_in_chronological_order() -> None:
    assert chain_uuids(alternating(5)) == ['u0', 'a1', 'u2', 'a3', 'u4']


def test_single_record_chain() -> None:
    assert chain_uuids([user('u0')]) == ['u0']


def test_skips_records_not_on_the_path() -> None:
    records = [
        user('u0'),
        assistant('a1', 'u0'),
        user('side', 'a1', isSidechain=True),
        user('p1', 'a1', type='progress'),
        user('u2', 'a1'),
        assistant('abandoned', 'u2'),
        assistant('a3', 'u2'),
    ]

    assert chain_uuids(records) == ['u0', 'a1', 'u2', 'a3']


def test_links_carry_file_index() -> None:
    records = [
        user('u0'),
        'not json',
        assistant('a1', 'u0'),
        user('noise', 'a1', type='progress'),
        user('u2', 'a1'),
    ]

    chain = build_chain(parsed(records))

    assert [link.file_index for link in chain] == [0, 2, 4]


def test_tail_is_last_record_with_uuid() -> None:
    records = [*alternating(3), '{"type":"file-history-snapshot","messageId":"m1"}', 'trailing garbage']

    assert chain_uuids(records) == ['u0', 'a1', 'u2']


def test_dangling_parent_ends_chain() -> None:
    records = [user('u0'), assistant('a1', 'missing'), user('u2', 'a1')]

    assert chain_uuids(records) == ['a1', 'u2']


def test_cycle_terminates() -> None:
    records = [user('u0', 'a1'), assistant('a1', 'u0')]

    assert chain_uuids(records) == ['u0', 'a1']


def test_no_uuid_raises() -> None:
    with pytest.raises(EmptyChainError):
        build_chain(parsed(['{"type":"user","sessionId":"s"}', 'garbage']))


def test_last_compact_boundary() -> None:
    records = [
        user('u0'),
        system('cb1', 'u0', subtype='compact_boundary'),
        user('u1', 'cb1'),
        system('td', 'u1'),
        system('cb2', 'td', subtype='compact_boundary'),
        user('u2', 'cb2'),
    ]

    assert find_last_compact_boundary(parsed(records)) == 4


def test_no_compact_boundary() -> None:
    assert find_last_compact_boundary(parsed(alternating(3))) is None
