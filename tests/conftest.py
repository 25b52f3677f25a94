"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from tests.factories import to_jsonl

WriteTranscript = Callable[..., Path]


@pytest.fixture
def write_transcript(tmp_path: Path) -> WriteTranscript:
    """Write records to a JSONL file under tmp_path and return its path."""

    def _write(records: Sequence[dict[str, Any] | str], name: str = 'session.jsonl') -> Path:
        path = tmp_path / name
        path.write_text(to_jsonl(records), encoding='utf-8')
        return path

    return _write
