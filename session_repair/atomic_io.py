"""Whole-file replacement: readers see either the old content or the new, never a mix."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from tempfile import mkstemp

__all__ = ['atomic_write_text']


def atomic_write_text(path: Path, text: str, encoding: str = 'utf-8') -> None:
    """Write `text` to a temp file beside `path`, then rename it over `path`.

    The original file's permission bits are carried over when it exists.
    """
    fd, tmp = mkstemp(suffix=path.suffix, prefix=path.name + '.tmp', dir=path.parent)
    tmp_path = Path(tmp)
    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline='') as f:
            f.write(text)
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
