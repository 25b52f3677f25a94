"""
Operation schemas for service results.

This package contains Pydantic models for operation results returned by services.
"""

from __future__ import annotations

from session_repair.schemas.operations.discovery import SessionFileInfo
from session_repair.schemas.operations.repair import (
    BreakPointInfo,
    RepairOptions,
    RepairResult,
    RepairState,
    ValidationReport,
)

__all__ = [
    # Discovery
    'SessionFileInfo',
    # Repair
    'BreakPointInfo',
    'RepairOptions',
    'RepairResult',
    'RepairState',
    'ValidationReport',
]
