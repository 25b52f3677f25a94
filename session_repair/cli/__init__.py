"""Command-line interface for session-repair."""
