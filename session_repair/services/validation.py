"""Integrity check for a rewritten transcript - unique uuids, resolvable parents."""

from __future__ import annotations

from collections.abc import Sequence

from session_repair.schemas.operations.repair import ValidationReport
from session_repair.schemas.transcript import ParsedLine

__all__ = ['validate_records']


def validate_records(lines: Sequence[ParsedLine]) -> ValidationReport:
    """
    Check for duplicate uuids and dangling parentUuid references.

    Line numbers in error messages are 1-based positions in `lines`.
    The first line is not checked for a parent (it is the root).
    """
    errors: list[str] = []
    uuids: set[str] = set()

    for i, line in enumerate(lines):
        record = line.record
        if record is None or not record.uuid:
            continue
        if record.uuid in uuids:
            errors.append(f'Duplicate UUID at line {i + 1}: {record.uuid}')
        uuids.add(record.uuid)

    for i, line in enumerate(lines[1:], start=1):
        record = line.record
        if record is None or not record.parentUuid:
            continue
        if record.parentUuid not in uuids:
            errors.append(f'Broken parent reference at line {i + 1}: {record.parentUuid} not found')

    return ValidationReport(valid=not errors, errors=errors)
