"""
ISO 8601 timestamp helpers.

Transcript timestamps are JavaScript `toISOString()` output
(`2025-01-15T10:00:00.123Z`). Records written by repair use the same shape.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

__all__ = [
    'format_timestamp',
    'midpoint_timestamp',
    'parse_timestamp',
    'seconds_between',
]

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MILLISECOND = timedelta(milliseconds=1)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC. None if unparseable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format as UTC with millisecond precision and a Z suffix."""
    text = value.astimezone(UTC).isoformat(timespec='milliseconds')
    return text.replace('+00:00', 'Z')


def seconds_between(earlier: str | None, later: str | None) -> float | None:
    """Seconds from `earlier` to `later`, or None if either is missing or unparseable."""
    start = parse_timestamp(earlier)
    end = parse_timestamp(later)
    if start is None or end is None:
        return None
    return (end - start).total_seconds()


def midpoint_timestamp(before: str | None, after: str | None) -> str:
    """
    Timestamp halfway between two ISO timestamps, floored to the millisecond.

    Falls back to whichever input parses, then to the current time.

    Examples:
        >>> midpoint_timestamp('2024-01-15T10:00:00Z', '2024-01-15T10:00:10Z')
        '2024-01-15T10:00:05.000Z'
    """
    start = parse_timestamp(before)
    end = parse_timestamp(after)

    if start is None or end is None:
        if start is not None:
            return before  # type: ignore[return-value]
        if end is not None:
            return after  # type: ignore[return-value]
        return format_timestamp(datetime.now(UTC))

    start_ms = (start - _EPOCH) // _MILLISECOND
    end_ms = (end - _EPOCH) // _MILLISECOND
    return format_timestamp(_EPOCH + (start_ms + end_ms) // 2 * _MILLISECOND)
