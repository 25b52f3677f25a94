"""Configuration for session-repair."""

from __future__ import annotations

from session_repair.config.base import RepairSettings, get_settings, lazy_settings

# Module-level singleton (lazy-loaded)
settings = lazy_settings(RepairSettings)

__all__ = [
    'RepairSettings',
    'get_settings',
    'lazy_settings',
    'settings',
]
