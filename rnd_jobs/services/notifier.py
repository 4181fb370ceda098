"""
Notification fanout over WebSocket.

Keeps the registry of connected board clients and pushes full-state events:
- tasks_updated: the complete mapped task list
- sync_status: {"lastSync": <iso timestamp>}

No diffing and no per-client filtering; sized for a handful of admin users.
"""

import logging
from typing import Any, Dict, List, Optional, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)

TASKS_UPDATED = "tasks_updated"
SYNC_STATUS = "sync_status"


class NotificationHub:
    """Registry of live connections with broadcast."""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.add(websocket)
        logger.info(f"Client connected ({len(self.active_connections)} active)")

    def disconnect(self, websocket: WebSocket) -> None:
        self.active_connections.discard(websocket)
        logger.info(f"Client disconnected ({len(self.active_connections)} active)")

    async def broadcast(self, event: str, data: Any) -> int:
        """Send an event to every client. Returns how many received it."""
        message = {"event": event, "data": data}
        delivered = 0

        for websocket in list(self.active_connections):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping client after failed {event} send: {e}")
                self.disconnect(websocket)

        logger.debug(f"Broadcast {event} to {delivered} client(s)")
        return delivered

    async def broadcast_tasks(self, tasks: List[Dict[str, Any]]) -> int:
        return await self.broadcast(TASKS_UPDATED, tasks)

    async def broadcast_sync_status(self, last_sync: str) -> int:
        return await self.broadcast(SYNC_STATUS, {"lastSync": last_sync})


# Singleton
_hub: Optional[NotificationHub] = None


def get_notification_hub() -> NotificationHub:
    """Get the notification hub singleton."""
    global _hub
    if _hub is None:
        _hub = NotificationHub()
    return _hub
