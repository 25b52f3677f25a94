"""
session-repair: offline rewind-point repair for Claude Code session transcripts.

Reconstructs the parentUuid chain of a dead transcript, splices synthetic
bookmark records into it and validates the result before replacing the file.
"""

from __future__ import annotations

__version__ = '0.1.0'
