"""Utility modules for the R&D job manager."""

from .background_tasks import create_safe_task, safe_background_task, drain_background_tasks
from .google_api import execute_with_timeout, GoogleAPITimeoutError

__all__ = [
    "create_safe_task",
    "safe_background_task",
    "drain_background_tasks",
    "execute_with_timeout",
    "GoogleAPITimeoutError",
]
