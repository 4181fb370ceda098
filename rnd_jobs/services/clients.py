"""Client service. Creation is idempotent by exact name."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..database.exceptions import DatabaseError
from ..database.repositories.clients import ClientRepository, get_client_repository
from ..models.records import client_to_view

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, repository: ClientRepository):
        self.repository = repository

    async def list_clients(self) -> List[Dict[str, Any]]:
        return [client_to_view(client) for client in await self.repository.get_all()]

    async def create_client(self, name: str) -> int:
        """Insert a client; an existing client with the same name keeps its id."""
        return await self.repository.create(name)

    async def ensure_client(self, name: str) -> Optional[int]:
        """Insert-if-absent used by ingestion; store errors are logged, not raised."""
        try:
            return await self.repository.create(name)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.warning(f"Could not ensure client {name!r}: {e}")
            return None


# Singleton
_client_service: Optional[ClientService] = None


def get_client_service() -> ClientService:
    global _client_service
    if _client_service is None:
        _client_service = ClientService(get_client_repository())
    return _client_service
