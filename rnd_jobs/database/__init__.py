"""
SQLite database module for the R&D job manager.

Handles:
- Task storage
- Crew and client directories
- Key/value settings (spreadsheet id, Google tokens, last sync)

Mirrors tasks to Google Sheets for office visibility.
"""

from .connection import (
    get_database,
    Database,
    init_database,
    close_database,
)
from .models import (
    Base,
    TaskDB,
    CrewDB,
    ClientDB,
    SettingDB,
)

__all__ = [
    "get_database",
    "Database",
    "init_database",
    "close_database",
    "Base",
    "TaskDB",
    "CrewDB",
    "ClientDB",
    "SettingDB",
]
