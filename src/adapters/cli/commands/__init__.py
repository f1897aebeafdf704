"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.calendar_command import (
    build_schedule_table,
    calendar,
)

__all__ = [
    "calendar",
    "build_schedule_table",
]
