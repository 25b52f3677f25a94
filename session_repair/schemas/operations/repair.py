"""
Repair operation schemas.

Models for repair options, the validator's report and the orchestrator's result.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import pydantic

from session_repair.config import settings
from session_repair.schemas.types import BaseStrictModel

# Orchestrator states, in pipeline order. 'Aborted' is reachable from any state.
RepairState = Literal[
    'Parsed',
    'MetadataExtracted',
    'ChainBuilt',
    'BreakPointsFound',
    'DryRunReported',
    'BackedUp',
    'Inserted',
    'Validated',
    'Written',
    'Done',
    'Aborted',
]


class RepairOptions(BaseStrictModel):
    """Per-run options. Defaults come from RepairSettings."""

    interval: int = pydantic.Field(default_factory=lambda: settings.DEFAULT_INTERVAL, ge=1)
    dry_run: bool = False
    verify: bool = True
    marker: str = pydantic.Field(default_factory=lambda: settings.DEFAULT_MARKER, min_length=1)


class BreakPointInfo(BaseStrictModel):
    """Location of one break point, as reported by a dry run."""

    chain_index: int
    file_line: int  # 1-based line in the original file
    uuid: str | None
    timestamp: str | None


class ValidationReport(BaseStrictModel):
    """Outcome of the integrity check over a rewritten record set."""

    valid: bool
    errors: Sequence[str]


class RepairResult(BaseStrictModel):
    """Structured result of a repair run. Never raised, always returned."""

    path: str
    dry_run: bool
    state: RepairState
    stages: Sequence[RepairState]  # Every state entered, in order
    condition: str | None  # Name of the aborting condition, if any

    inserted: int
    backup_path: str | None
    errors: Sequence[str]
    warnings: Sequence[str]
    break_points: Sequence[BreakPointInfo]

    records_before: int
    records_after: int

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 0
