"""
Repository classes for database operations.

Each repository handles CRUD and lookups for its table.
"""

from .tasks import TaskRepository, get_task_repository
from .crew import CrewRepository, get_crew_repository
from .clients import ClientRepository, get_client_repository
from .settings import (
    SettingsRepository,
    get_settings_repository,
    SPREADSHEET_ID,
    GOOGLE_TOKENS,
    LAST_SYNC,
)

__all__ = [
    "TaskRepository",
    "get_task_repository",
    "CrewRepository",
    "get_crew_repository",
    "ClientRepository",
    "get_client_repository",
    "SettingsRepository",
    "get_settings_repository",
    "SPREADSHEET_ID",
    "GOOGLE_TOKENS",
    "LAST_SYNC",
]
