"""
Client repository.

Client names are unique; create() is idempotent by name so concurrent
duplicate inserts resolve to the same row.
"""

import logging
from typing import Optional, List

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from ..connection import Database, get_database
from ..models import ClientDB
from ..exceptions import DatabaseOperationError

logger = logging.getLogger(__name__)


class ClientRepository:
    """Repository for client operations."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    async def create(self, name: str) -> int:
        """
        Insert a client and return its id.

        An existing client with exactly this name keeps its id. The insert is
        only attempted for new names; a conflict from a concurrent insert of
        the same name also resolves to the existing row.
        """
        existing = await self.get_by_name(name)
        if existing:
            logger.debug(f"Client {name!r} already exists as {existing.id}")
            return existing.id

        try:
            async with self.db.session() as session:
                client = ClientDB(name=name)
                session.add(client)
                await session.flush()
                client_id = client.id

            logger.info(f"Created client {client_id}: {name}")
            return client_id

        except IntegrityError:
            existing = await self.get_by_name(name)
            if existing:
                logger.info(f"Client {name!r} was inserted concurrently as {existing.id}")
                return existing.id
            raise DatabaseOperationError(f"Failed to create client {name!r}")

    async def get_by_name(self, name: str) -> Optional[ClientDB]:
        """Get client by exact name."""
        async with self.db.session() as session:
            result = await session.execute(
                select(ClientDB).where(ClientDB.name == name)
            )
            return result.scalar_one_or_none()

    async def get_all(self) -> List[ClientDB]:
        """Get all clients ordered by name."""
        async with self.db.session() as session:
            result = await session.execute(
                select(ClientDB).order_by(ClientDB.name.asc())
            )
            return list(result.scalars().all())

    async def count(self) -> int:
        async with self.db.session() as session:
            result = await session.execute(select(func.count()).select_from(ClientDB))
            return result.scalar_one()


# Singleton
_client_repository: Optional[ClientRepository] = None


def get_client_repository() -> ClientRepository:
    """Get the client repository singleton."""
    global _client_repository
    if _client_repository is None:
        _client_repository = ClientRepository()
    return _client_repository
