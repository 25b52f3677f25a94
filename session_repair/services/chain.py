"""
Chain reconstruction - the one conversational path a rewind UI would walk.

A transcript file is not a linear conversation. It can hold sidechain
records, abandoned branches and records from older compaction segments. The
path that matters is the one reached by starting at the last record with a
uuid and following parentUuid pointers back to the root.

The graph is kept as a uuid -> (record, file index) lookup rather than as
linked objects; the backward walk carries a visited set so a parentUuid
cycle ends the walk instead of looping forever.
"""

from __future__ import annotations

from collections.abc import Sequence

import attrs

from session_repair.exceptions import EmptyChainError
from session_repair.schemas.transcript import ParsedLine, TranscriptRecord

__all__ = [
    'ChainLink',
    'build_chain',
    'find_last_compact_boundary',
]


@attrs.define(frozen=True)
class ChainLink:
    """A record on the chain and its index in file order."""

    uuid: str
    record: TranscriptRecord
    file_index: int


def _index_by_uuid(lines: Sequence[ParsedLine]) -> dict[str, ChainLink]:
    # Last occurrence wins for duplicate uuids
    index: dict[str, ChainLink] = {}
    for i, line in enumerate(lines):
        if line.record is not None and line.record.uuid:
            index[line.record.uuid] = ChainLink(uuid=line.record.uuid, record=line.record, file_index=i)
    return index


def _find_tail(lines: Sequence[ParsedLine]) -> ChainLink | None:
    for i in range(len(lines) - 1, -1, -1):
        record = lines[i].record
        if record is not None and record.uuid:
            return ChainLink(uuid=record.uuid, record=record, file_index=i)
    return None


def build_chain(lines: Sequence[ParsedLine]) -> list[ChainLink]:
    """
    Build the parentUuid chain from the last record backwards.

    Args:
        lines: Parsed transcript lines in file order

    Returns:
        Chain links in chronological order (root first)

    Raises:
        EmptyChainError: If no record has a uuid
    """
    by_uuid = _index_by_uuid(lines)
    tail = _find_tail(lines)
    if tail is None:
        raise EmptyChainError()

    chain: list[ChainLink] = []
    visited: set[str] = set()
    current: ChainLink | None = tail
    while current is not None:
        if current.uuid in visited:
            break  # Cycle
        visited.add(current.uuid)
        chain.append(current)

        parent = current.record.parentUuid
        if not parent:
            break  # Root
        current = by_uuid.get(parent)  # None for a dangling pointer

    chain.reverse()
    return chain


def find_last_compact_boundary(lines: Sequence[ParsedLine]) -> int | None:
    """File index of the most recent compact_boundary record, or None."""
    for i in range(len(lines) - 1, -1, -1):
        record = lines[i].record
        if record is not None and record.is_compact_boundary:
            return i
    return None
