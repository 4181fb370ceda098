"""
Email ingestion: turns SPK/SPD work-order emails into tasks.

Expected body template (labels are case-insensitive):

    Kode: SPK-2024-088
    Klien: Kriya Nusantara
    Proyek: Souvenir Eksklusif G20
    Penanggung Jawab: Ahmad
    Deskripsi: free text, may span
    several lines up to the end of the message

Only the configured trusted sender is accepted, and only messages that
mention SPK or SPD in the subject or body. Everything after those two checks
is best-effort: unmatched fields fall back to placeholders.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import settings
from .tasks import TaskService, get_task_service
from .crew import CrewService, get_crew_service
from .clients import ClientService, get_client_service

logger = logging.getLogger(__name__)

SPK = "SPK"
SPD = "SPD"

UNKNOWN_CLIENT = "Unknown Client"
NEW_PROJECT = "New Project"

# One pattern per label: label, colon, optional whitespace, rest of the line
FIELD_PATTERNS = {
    "title": re.compile(r"Kode:\s*(.*)", re.IGNORECASE),
    "client_name": re.compile(r"Klien:\s*(.*)", re.IGNORECASE),
    "project_name": re.compile(r"Proyek:\s*(.*)", re.IGNORECASE),
    "assignee_name": re.compile(r"Penanggung Jawab:\s*(.*)", re.IGNORECASE),
}
# Description runs to the end of the text
DESCRIPTION_PATTERN = re.compile(r"Deskripsi:\s*(.*)", re.IGNORECASE | re.DOTALL)


class EmailIngestionError(Exception):
    """Base exception for rejected emails."""
    pass


class UnauthorizedSenderError(EmailIngestionError):
    """Sender is not the trusted address."""
    pass


class UnrecognizedMessageError(EmailIngestionError):
    """Message carries no SPK/SPD marker."""
    pass


@dataclass
class WorkOrder:
    """Fields extracted from a work-order email."""
    kind: str
    title: str
    client_name: str
    project_name: str
    assignee_name: str
    description: str


def classify_message(subject: str, body: str) -> Optional[str]:
    """SPK when SPK appears anywhere, else SPD when SPD does, else None."""
    text = f"{subject or ''}\n{body or ''}".upper()
    if SPK in text:
        return SPK
    if SPD in text:
        return SPD
    return None


def _extract(pattern: re.Pattern, body: str) -> str:
    match = pattern.search(body)
    return match.group(1).strip() if match else ""


def parse_work_order(subject: str, body: str) -> WorkOrder:
    """Extract labelled fields from the body; empty matches use the fallbacks."""
    kind = classify_message(subject, body) or SPK
    body = body or ""
    fields = {name: _extract(pattern, body) for name, pattern in FIELD_PATTERNS.items()}

    return WorkOrder(
        kind=kind,
        title=fields["title"] or f"{kind}-NEW",
        client_name=fields["client_name"] or UNKNOWN_CLIENT,
        project_name=fields["project_name"] or NEW_PROJECT,
        assignee_name=fields["assignee_name"],
        description=_extract(DESCRIPTION_PATTERN, body) or body,
    )


class EmailIngestionService:
    """Validates, parses and files inbound work-order emails."""

    def __init__(
        self,
        task_service: TaskService,
        crew_service: CrewService,
        client_service: ClientService,
        trusted_sender: Optional[str] = None,
    ):
        self.task_service = task_service
        self.crew_service = crew_service
        self.client_service = client_service
        self.trusted_sender = trusted_sender or settings.trusted_sender_email

    async def ingest(self, sender: str, subject: str, body: str) -> Dict[str, Any]:
        """
        Create a task from an email.

        Raises:
            UnauthorizedSenderError: sender is not exactly the trusted address
            UnrecognizedMessageError: no SPK/SPD marker in subject or body
        """
        if sender != self.trusted_sender:
            logger.warning(f"Rejected email from untrusted sender {sender!r}")
            raise UnauthorizedSenderError("Unauthorized sender")

        kind = classify_message(subject, body)
        if kind is None:
            logger.info(f"Ignored email without SPK/SPD marker: {subject!r}")
            raise UnrecognizedMessageError("Not an SPK/SPD email")

        order = parse_work_order(subject, body)

        assignee = ""
        if order.assignee_name:
            member = await self.crew_service.find_by_name_fragment(order.assignee_name)
            if member:
                assignee = member.name
            else:
                logger.info(f"No crew member matches {order.assignee_name!r}; leaving task unassigned")

        await self.client_service.ensure_client(order.client_name)

        task_id = await self.task_service.create_task({
            "title": order.title,
            "client_name": order.client_name,
            "project_name": order.project_name,
            "description": order.description,
            "status": "To Do",
            "priority": "High",
            "category": "Produk",
            "stage": "Inbox",
            "assignee": assignee,
        })

        logger.info(f"Created task {task_id} from {kind} email {order.title}")
        return {
            "success": True,
            "taskId": task_id,
            "message": f"Task created automatically from email: {order.title}",
        }


# Singleton
_email_service: Optional[EmailIngestionService] = None


def get_email_ingestion_service() -> EmailIngestionService:
    global _email_service
    if _email_service is None:
        _email_service = EmailIngestionService(
            get_task_service(),
            get_crew_service(),
            get_client_service(),
        )
    return _email_service
