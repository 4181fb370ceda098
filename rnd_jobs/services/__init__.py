"""Business services for the R&D job manager."""

from .notifier import NotificationHub, get_notification_hub, TASKS_UPDATED, SYNC_STATUS
from .tasks import TaskService, get_task_service
from .crew import CrewService, get_crew_service
from .clients import ClientService, get_client_service
from .email_ingest import (
    EmailIngestionService,
    EmailIngestionError,
    UnauthorizedSenderError,
    UnrecognizedMessageError,
    WorkOrder,
    classify_message,
    parse_work_order,
    get_email_ingestion_service,
)

__all__ = [
    "NotificationHub",
    "get_notification_hub",
    "TASKS_UPDATED",
    "SYNC_STATUS",
    "TaskService",
    "get_task_service",
    "CrewService",
    "get_crew_service",
    "ClientService",
    "get_client_service",
    "EmailIngestionService",
    "EmailIngestionError",
    "UnauthorizedSenderError",
    "UnrecognizedMessageError",
    "WorkOrder",
    "classify_message",
    "parse_work_order",
    "get_email_ingestion_service",
]
