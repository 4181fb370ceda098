"""Inbound webhooks: work-order emails forwarded by the mail relay."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..models.api_validation import EmailWebhookPayload
from ..services.email_ingest import (
    EmailIngestionService,
    UnauthorizedSenderError,
    UnrecognizedMessageError,
    get_email_ingestion_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks")


@router.post("/email")
async def email_webhook(
    payload: EmailWebhookPayload,
    service: EmailIngestionService = Depends(get_email_ingestion_service),
):
    """
    Create a task from an SPK/SPD email.

    403 for any sender other than the trusted one, 400 when the message
    carries no SPK/SPD marker. Neither case writes anything.
    """
    try:
        return await service.ingest(payload.sender, payload.subject, payload.body)
    except UnauthorizedSenderError as e:
        return JSONResponse(status_code=403, content={"error": str(e)})
    except UnrecognizedMessageError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
