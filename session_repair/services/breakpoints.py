"""
Break-point selection - where on the chain synthetic bookmarks go.

A break point is a chain index; the bookmark is inserted after chain[i] and
chain[i + 1] becomes its child. Three criteria propose candidates:

1. Interval: every `interval` assistant records since the last break point
2. Natural boundary: a system/turn_duration record (end of a turn)
3. Time gap: more than 60 seconds between chain[i - 1] and chain[i]; the
   candidate is i - 1 so the bookmark sits inside the gap

A rewind UI only lists a user record that has an assistant child, so every
candidate is snapped forward to the nearest position whose successor is an
assistant record. Without this, bookmarks placed before tool-result user
records are invisible. When nothing qualifies later in the chain, the nearest
earlier qualifying position is used (never the root, which already is one).

Snapped positions closer than two chain positions to the previous break point
are dropped. Only the chain after the most recent compact_boundary is in scope.
"""

from __future__ import annotations

from collections.abc import Sequence

from session_repair.services.chain import ChainLink
from session_repair.timestamps import seconds_between

__all__ = [
    'DEFAULT_TIME_GAP_SECONDS',
    'find_break_points',
]

DEFAULT_TIME_GAP_SECONDS = 60.0

# Minimum distance between two accepted break points
MIN_SPACING = 2


def find_break_points(
    chain: Sequence[ChainLink],
    start_file_index: int,
    interval: int,
    time_gap_seconds: float = DEFAULT_TIME_GAP_SECONDS,
) -> list[int]:
    """
    Find break points on the chain.

    Args:
        chain: Chain links in chronological order
        start_file_index: First in-scope file index (one past the last compact_boundary)
        interval: Assistant records between interval break points (>= 1)
        time_gap_seconds: Gap that counts as a pause in the conversation

    Returns:
        Ascending, de-duplicated chain indices (may be empty)
    """
    if interval < 1:
        raise ValueError(f'interval must be at least 1, got {interval}')

    def in_scope(j: int) -> bool:
        return chain[j].file_index >= start_file_index

    def has_assistant_successor(j: int) -> bool:
        return j + 1 < len(chain) and in_scope(j) and in_scope(j + 1) and chain[j + 1].record.is_assistant

    def spaced(j: int, last: int | None) -> bool:
        return last is None or j >= last + MIN_SPACING

    def snap(candidate: int, last: int | None) -> int | None:
        for j in range(candidate, len(chain) - 1):
            if has_assistant_successor(j):
                return j if spaced(j, last) else None
        # Nothing later qualifies; fall back to the nearest earlier position
        for j in range(candidate - 1, 0, -1):
            if not spaced(j, last):
                break
            if has_assistant_successor(j):
                return j
        return None

    break_points: list[int] = []
    assistant_count = 0
    last_break: int | None = None

    def accept(candidate: int) -> None:
        nonlocal assistant_count, last_break
        position = snap(candidate, last_break)
        if position is None:
            return
        break_points.append(position)
        assistant_count = 0
        last_break = position

    for i, link in enumerate(chain):
        if not in_scope(i):
            continue
        record = link.record

        if record.is_assistant:
            assistant_count += 1

        # Criterion 1: every N assistant records
        if record.is_assistant and assistant_count >= interval and i > 0:
            accept(i)

        # Criterion 2: turn boundaries
        if record.is_turn_boundary:
            accept(i)

        # Criterion 3: pauses between adjacent chain records
        if i > 0 and in_scope(i - 1):
            gap = seconds_between(chain[i - 1].record.timestamp, record.timestamp)
            if gap is not None and gap > time_gap_seconds:
                accept(i - 1)

    return sorted(set(break_points))
