"""WebSocket push channel for live board updates."""

import logging

from fastapi import APIRouter, Depends, WebSocket

from ..services.notifier import NotificationHub, get_notification_hub

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def board_updates(
    websocket: WebSocket,
    hub: NotificationHub = Depends(get_notification_hub),
):
    """
    Server push only. Clients receive {"event", "data"} messages; text or
    binary frames they send are read and dropped.
    """
    await hub.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        hub.disconnect(websocket)
