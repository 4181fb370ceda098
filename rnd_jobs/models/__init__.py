from .task import TaskStatus, TaskPriority, TaskCategory, CATEGORY_STAGES, DEFAULT_STAGE, pipelines
from .crew import Tenure, tenure_for, tenure_years
from .records import (
    TaskView,
    CrewView,
    ClientView,
    task_to_view,
    tasks_to_view,
    crew_to_view,
    client_to_view,
)
from .api_validation import (
    TaskPayload,
    CrewCreate,
    ClientCreate,
    EmailWebhookPayload,
    SpreadsheetSettingsUpdate,
)

__all__ = [
    "TaskStatus",
    "TaskPriority",
    "TaskCategory",
    "CATEGORY_STAGES",
    "DEFAULT_STAGE",
    "pipelines",
    "Tenure",
    "tenure_for",
    "tenure_years",
    "TaskView",
    "CrewView",
    "ClientView",
    "task_to_view",
    "tasks_to_view",
    "crew_to_view",
    "client_to_view",
    "TaskPayload",
    "CrewCreate",
    "ClientCreate",
    "EmailWebhookPayload",
    "SpreadsheetSettingsUpdate",
]
