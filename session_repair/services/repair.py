"""
Session repair service - inserts rewind bookmarks into a dead transcript.

Pipeline (each stage is a state recorded on the result):

    Parsed -> MetadataExtracted -> ChainBuilt -> BreakPointsFound
        -> DryRunReported                                   (dry run)
        -> BackedUp -> Inserted -> Validated -> Written     (normal)
    -> Done

Any stage can end the run in Aborted. Failures are RepairAbortedError
subclasses raised by the stages and converted here into error strings, so a
run always returns a RepairResult.

Safety ordering:
- The backup is a byte copy taken before anything is mutated in memory
- Validation runs on the rewritten set before the target is touched
- The target is replaced in one rename, only after validation passes
- If validation fails, the backup stays and the target is left as it was
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

import attrs

from session_repair.atomic_io import atomic_write_text
from session_repair.config import RepairSettings, settings as default_settings
from session_repair.exceptions import (
    BackupFailedError,
    EmptyInputError,
    RepairAbortedError,
    UnreadableFileError,
    ValidationFailedError,
    WriteFailedError,
)
from session_repair.paths import backup_path_for
from session_repair.protocols import LoggerProtocol, NullLogger
from session_repair.schemas.operations.repair import BreakPointInfo, RepairOptions, RepairResult, RepairState
from session_repair.schemas.transcript import ParsedLine
from session_repair.services.breakpoints import find_break_points
from session_repair.services.chain import ChainLink, build_chain, find_last_compact_boundary
from session_repair.services.insertion import IdFactory, insert_bookmarks, new_record_id
from session_repair.services.metadata import extract_metadata
from session_repair.services.parser import parse_transcript, serialize_transcript
from session_repair.services.validation import validate_records

__all__ = [
    'SessionRepairService',
    'repair_session',
]

NO_BREAK_POINTS_WARNING = 'No break points found on chain - segment too short or already well-anchored'
VALIDATION_ABORT_WARNING = 'Validation failed - repaired file NOT written. Backup preserved.'


@attrs.define
class _RepairRun:
    """Mutable accumulator for one repair invocation."""

    path: Path
    dry_run: bool
    logger: LoggerProtocol
    stages: list[RepairState] = attrs.field(factory=list)
    errors: list[str] = attrs.field(factory=list)
    warnings: list[str] = attrs.field(factory=list)
    break_points: list[BreakPointInfo] = attrs.field(factory=list)
    condition: str | None = None
    inserted: int = 0
    backup_path: Path | None = None
    records_before: int = 0
    records_after: int = 0

    def enter(self, state: RepairState) -> None:
        self.stages.append(state)
        self.logger.info(f'[{state}] {self.path.name}')

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        self.logger.warning(message)

    def abort(self, exc: RepairAbortedError) -> None:
        self.condition = exc.condition
        if isinstance(exc, ValidationFailedError):
            self.errors.extend(exc.errors)
            self.warnings.append(VALIDATION_ABORT_WARNING)
        else:
            self.errors.append(str(exc))
        for error in self.errors:
            self.logger.error(error)
        self.stages.append('Aborted')

    def to_result(self) -> RepairResult:
        return RepairResult(
            path=str(self.path),
            dry_run=self.dry_run,
            state=self.stages[-1] if self.stages else 'Aborted',
            stages=list(self.stages),
            condition=self.condition,
            inserted=self.inserted,
            backup_path=str(self.backup_path) if self.backup_path else None,
            errors=list(self.errors),
            warnings=list(self.warnings),
            break_points=list(self.break_points),
            records_before=self.records_before,
            records_after=self.records_after,
        )


class SessionRepairService:
    """
    Service for offline repair of anchor-poor session transcripts.

    Stateless between calls: one repair() call processes one file from start
    to finish. Assumes nothing else writes the file during the run.
    """

    def __init__(
        self,
        settings: RepairSettings | None = None,
        logger: LoggerProtocol | None = None,
        id_factory: IdFactory = new_record_id,
    ) -> None:
        """
        Initialize repair service.

        Args:
            settings: Settings (defaults to the module-level lazy settings)
            logger: Optional logger for stage transitions and insertions
            id_factory: Source of uuids for synthetic records
        """
        self.settings = settings or default_settings
        self.logger = logger or NullLogger()
        self.id_factory = id_factory

    def repair(self, path: Path | str, options: RepairOptions | None = None) -> RepairResult:
        """
        Repair a transcript file in place.

        Args:
            path: Session JSONL file
            options: Run options (defaults from settings)

        Returns:
            RepairResult; `errors` is non-empty iff the run aborted
        """
        options = options or RepairOptions()
        run = _RepairRun(path=Path(path), dry_run=options.dry_run, logger=self.logger)

        try:
            self._run(run, options)
        except RepairAbortedError as e:
            run.abort(e)

        return run.to_result()

    def _run(self, run: _RepairRun, options: RepairOptions) -> None:
        lines = self._read(run.path)
        run.records_before = run.records_after = len(lines)
        run.enter('Parsed')

        metadata = extract_metadata(lines)
        run.enter('MetadataExtracted')

        chain = build_chain(lines)
        run.enter('ChainBuilt')
        self.logger.info(f'Chain: {len(chain)} of {len(lines)} records, session {metadata.session_id}')

        boundary = find_last_compact_boundary(lines)
        start_file_index = 0 if boundary is None else boundary + 1
        if boundary is not None:
            self.logger.info(f'Last compact_boundary at line {boundary + 1}; repair starts after it')

        break_points = find_break_points(chain, start_file_index, options.interval, self.settings.TIME_GAP_SECONDS)
        run.break_points = self._describe(chain, break_points)
        run.enter('BreakPointsFound')

        if not break_points:
            run.warn(NO_BREAK_POINTS_WARNING)
            run.enter('Done')
            return

        if options.dry_run:
            run.inserted = len(break_points)
            run.warn(f'DRY RUN: Would insert {len(break_points)} rewind points')
            for info in run.break_points:
                timestamp = info.timestamp or 'unknown'
                run.warn(f'  Break at chain[{info.chain_index}] file line {info.file_line} ({timestamp})')
            run.enter('DryRunReported')
            run.enter('Done')
            return

        run.backup_path = self._backup(run.path)
        run.enter('BackedUp')

        insertion = insert_bookmarks(
            lines, chain, break_points, metadata, options.marker, id_factory=self.id_factory, logger=self.logger
        )
        run.inserted = insertion.inserted
        run.records_after = len(insertion.lines)
        run.enter('Inserted')

        if options.verify:
            report = validate_records(insertion.lines)
            if not report.valid:
                raise ValidationFailedError(report.errors)
            run.enter('Validated')
        else:
            run.warn('Validation skipped - chain integrity of the repaired file was not checked')

        self._write(run.path, insertion.lines)
        run.enter('Written')

        run.warn(
            'NOTE: Claude Code loading repaired JSONL as rewind points is UNVERIFIED. '
            'Test on a non-critical session first. '
            f'Backup at: {run.backup_path}'
        )
        run.enter('Done')

    def _read(self, path: Path) -> list[ParsedLine]:
        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableFileError(path) from e

        lines = parse_transcript(content)
        if not lines:
            raise EmptyInputError()
        return lines

    def _backup(self, path: Path) -> Path:
        backup_path = backup_path_for(path, self.settings.BACKUP_SUFFIX)
        try:
            shutil.copy2(path, backup_path)
        except OSError as e:
            raise BackupFailedError(backup_path) from e
        self.logger.info(f'Backup: {backup_path}')
        return backup_path

    def _write(self, path: Path, lines: Sequence[ParsedLine]) -> None:
        try:
            atomic_write_text(path, serialize_transcript(lines))
        except OSError as e:
            raise WriteFailedError(path) from e

    @staticmethod
    def _describe(chain: Sequence[ChainLink], break_points: Sequence[int]) -> list[BreakPointInfo]:
        return [
            BreakPointInfo(
                chain_index=bp,
                file_line=chain[bp].file_index + 1,
                uuid=chain[bp].record.uuid,
                timestamp=chain[bp].record.timestamp,
            )
            for bp in break_points
        ]


def repair_session(path: Path | str, options: RepairOptions | None = None) -> RepairResult:
    """Repair a transcript with default settings and no logging."""
    return SessionRepairService().repair(path, options)
