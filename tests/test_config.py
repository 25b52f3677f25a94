"""Tests for settings loading and validation."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from session_repair.config import RepairSettings, get_settings
from session_repair.schemas.operations.repair import RepairOptions


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ('CLAUDE_DIR', 'DEFAULT_INTERVAL', 'DEFAULT_MARKER', 'BACKUP_SUFFIX', 'TIME_GAP_SECONDS'):
        monkeypatch.delenv(f'SESSION_REPAIR_{name}', raising=False)

    settings = RepairSettings()

    assert settings.DEFAULT_INTERVAL == 5
    assert settings.DEFAULT_MARKER == '·'
    assert settings.BACKUP_SUFFIX == '.tav-backup'
    assert settings.TIME_GAP_SECONDS == 60.0
    assert settings.CLAUDE_DIR.name == '.claude'


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv('SESSION_REPAIR_DEFAULT_INTERVAL', '7')
    monkeypatch.setenv('SESSION_REPAIR_CLAUDE_DIR', str(tmp_path))

    settings = RepairSettings()

    assert settings.DEFAULT_INTERVAL == 7
    assert settings.CLAUDE_DIR == tmp_path


@pytest.mark.parametrize(
    'overrides',
    [
        {'DEFAULT_INTERVAL': 0},
        {'DEFAULT_MARKER': ''},
        {'BACKUP_SUFFIX': ''},
        {'TIME_GAP_SECONDS': 0},
    ],
    ids=['interval', 'marker', 'suffix', 'time-gap'],
)
def test_invalid_values_rejected(overrides: dict[str, object]) -> None:
    with pytest.raises(pydantic.ValidationError):
        RepairSettings(**overrides)


def test_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('SESSION_REPAIR_DEFAULT_MARKER', raising=False)
    env_file = tmp_path / 'repair.env'
    env_file.write_text('SESSION_REPAIR_DEFAULT_MARKER=*\n', encoding='utf-8')

    settings = get_settings(RepairSettings, env_file=str(env_file))

    assert settings.DEFAULT_MARKER == '*'


def test_env_file_from_load_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('SESSION_REPAIR_DEFAULT_INTERVAL', raising=False)
    env_file = tmp_path / 'repair.env'
    env_file.write_text('SESSION_REPAIR_DEFAULT_INTERVAL=2\n', encoding='utf-8')
    monkeypatch.setenv('LOAD_ENV_FILE', str(env_file))

    assert get_settings(RepairSettings).DEFAULT_INTERVAL == 2


def test_missing_env_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_settings(RepairSettings, env_file=str(tmp_path / 'nope.env'))


def test_repair_options_validation() -> None:
    with pytest.raises(pydantic.ValidationError):
        RepairOptions(interval=0)
    with pytest.raises(pydantic.ValidationError):
        RepairOptions(marker='')


def test_repair_options_defaults() -> None:
    options = RepairOptions()

    assert options.interval >= 1
    assert options.marker
    assert options.dry_run is False
    assert options.verify is True
