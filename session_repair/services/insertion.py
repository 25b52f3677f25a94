"""
Synthetic bookmark insertion and chain re-linking.

Break points are chain indices, but the rewrite happens in file order, and a
chain successor is not necessarily the next line in the file (sidechains and
noise records sit in between). So insertion is two-phase:

1. Plan: for each break point create the synthetic record, remember the file
   index it goes after, and the file index of the chain successor that must
   be reparented onto it.
2. Apply: rebuild the line list in one pass, reparenting and splicing as
   planned. No index shifting happens while iterating.

Synthetic records get UUIDv7 ids, which tells them apart from the UUIDv4 ids
Claude Code assigns to native records.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import attrs
import uuid6

from session_repair.protocols import LoggerProtocol, NullLogger
from session_repair.schemas.transcript import HUMAN, ParsedLine, SessionMetadata
from session_repair.services.chain import ChainLink
from session_repair.timestamps import midpoint_timestamp

__all__ = [
    'InsertionPlan',
    'InsertionResult',
    'PlannedInsertion',
    'apply_insertions',
    'create_synthetic_record',
    'insert_bookmarks',
    'new_record_id',
    'plan_insertions',
]

IdFactory = Callable[[], str]


def new_record_id() -> str:
    return str(uuid6.uuid7())


def create_synthetic_record(
    metadata: SessionMetadata,
    parent_uuid: str,
    timestamp: str,
    marker: str,
    id_factory: IdFactory = new_record_id,
) -> dict[str, Any]:
    """
    Create a synthetic user record that serves as a rewind point.

    Mirrors the field layout of a real external user record. gitBranch and
    slug are only present when the session has them.
    """
    record: dict[str, Any] = {
        'parentUuid': parent_uuid,
        'isSidechain': False,
        'userType': 'external',
        'cwd': metadata.cwd,
        'sessionId': metadata.session_id,
        'version': metadata.version,
        'type': HUMAN,
        'message': {'role': 'user', 'content': marker},
        'uuid': id_factory(),
        'timestamp': timestamp,
    }
    if metadata.git_branch:
        record['gitBranch'] = metadata.git_branch
    if metadata.slug:
        record['slug'] = metadata.slug
    return record


@attrs.define(frozen=True)
class PlannedInsertion:
    """One bookmark: where it goes and which record moves under it."""

    chain_index: int
    anchor_file_index: int  # Synthetic line is spliced right after this line
    successor_file_index: int  # This line's parentUuid becomes the synthetic uuid
    synthetic_uuid: str
    synthetic: ParsedLine


@attrs.define(frozen=True)
class InsertionPlan:
    insertions: Sequence[PlannedInsertion]

    def __len__(self) -> int:
        return len(self.insertions)


@attrs.define(frozen=True)
class InsertionResult:
    lines: list[ParsedLine]
    inserted: int


def plan_insertions(
    chain: Sequence[ChainLink],
    break_points: Sequence[int],
    metadata: SessionMetadata,
    marker: str,
    id_factory: IdFactory = new_record_id,
) -> InsertionPlan:
    """
    Phase 1: create synthetic records and decide where they go.

    Break points without a chain successor (or out of range) are skipped.
    """
    insertions: list[PlannedInsertion] = []
    anchors_seen: set[int] = set()

    for chain_index in sorted(set(break_points)):
        if not 0 <= chain_index < len(chain) - 1:
            continue
        anchor = chain[chain_index]
        successor = chain[chain_index + 1]
        if anchor.file_index in anchors_seen:
            continue
        anchors_seen.add(anchor.file_index)

        timestamp = midpoint_timestamp(anchor.record.timestamp, successor.record.timestamp)
        synthetic = create_synthetic_record(metadata, anchor.uuid, timestamp, marker, id_factory)
        insertions.append(
            PlannedInsertion(
                chain_index=chain_index,
                anchor_file_index=anchor.file_index,
                successor_file_index=successor.file_index,
                synthetic_uuid=synthetic['uuid'],
                synthetic=ParsedLine.from_data(synthetic),
            )
        )

    return InsertionPlan(insertions=insertions)


def apply_insertions(lines: Sequence[ParsedLine], plan: InsertionPlan) -> list[ParsedLine]:
    """Phase 2: rebuild the line list in file order with the plan applied."""
    insert_after = {p.anchor_file_index: p for p in plan.insertions}
    reparents = {p.successor_file_index: p.synthetic_uuid for p in plan.insertions}

    result: list[ParsedLine] = []
    for i, line in enumerate(lines):
        new_parent = reparents.get(i)
        result.append(line.with_parent(new_parent) if new_parent is not None else line)

        planned = insert_after.get(i)
        if planned is not None:
            synthetic = planned.synthetic
            if line.raw.endswith('\r'):  # Match the anchor's CRLF ending
                synthetic = synthetic.model_copy(update={'raw': synthetic.raw + '\r'})
            result.append(synthetic)

    return result


def insert_bookmarks(
    lines: Sequence[ParsedLine],
    chain: Sequence[ChainLink],
    break_points: Sequence[int],
    metadata: SessionMetadata,
    marker: str,
    id_factory: IdFactory = new_record_id,
    logger: LoggerProtocol | None = None,
) -> InsertionResult:
    """
    Insert synthetic bookmarks at chain break points and reparent chain successors.

    Args:
        lines: Parsed transcript lines in file order (not modified)
        chain: Chain built from `lines`
        break_points: Chain indices to insert after
        metadata: Session identity for the synthetic records
        marker: Message content of each synthetic record
        id_factory: Source of new record ids
        logger: Optional logger

    Returns:
        InsertionResult with the rewritten lines and the number inserted
    """
    logger = logger or NullLogger()

    plan = plan_insertions(chain, break_points, metadata, marker, id_factory)
    for p in plan.insertions:
        successor_uuid = chain[p.chain_index + 1].uuid
        logger.info(
            f'Bookmark {p.synthetic_uuid} after line {p.anchor_file_index + 1} '
            f'(chain[{p.chain_index}]); reparenting {successor_uuid} at line {p.successor_file_index + 1}'
        )

    return InsertionResult(lines=apply_insertions(lines, plan), inserted=len(plan))
