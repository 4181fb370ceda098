"""
Crew member repository.

Stores crew information for:
- Contact details (phone, address, photo)
- Role and join date
- Performance score
- Assignee lookup by name fragment
"""

import logging
from typing import Optional, List, Dict, Any

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError

from ..connection import Database, get_database
from ..models import CrewDB
from ..exceptions import DatabaseConstraintError, DatabaseOperationError

logger = logging.getLogger(__name__)


class CrewRepository:
    """Repository for crew member operations."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    async def create(self, crew_data: Dict[str, Any]) -> CrewDB:
        """Create a new crew member."""
        name = crew_data.get("name")
        async with self.db.session() as session:
            try:
                member = CrewDB(
                    name=name,
                    role=crew_data.get("role"),
                    photo=crew_data.get("photo"),
                    phone=crew_data.get("phone"),
                    address=crew_data.get("address"),
                    join_date=crew_data.get("join_date"),
                    performance=crew_data.get("performance") or 0,
                )
                session.add(member)
                await session.flush()

                logger.info(f"Created crew member: {name}")
                return member

            except IntegrityError as e:
                logger.error(f"Constraint violation creating crew member {name}: {e}")
                raise DatabaseConstraintError(f"Cannot create crew member {name}: constraint violation")

            except Exception as e:
                logger.error(f"CRITICAL: Crew member creation failed for {name}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to create crew member {name}: {e}")

    async def get_all(self) -> List[CrewDB]:
        """Get all crew members ordered by name."""
        async with self.db.session() as session:
            result = await session.execute(
                select(CrewDB).order_by(CrewDB.name.asc())
            )
            return list(result.scalars().all())

    async def find_by_name_fragment(self, fragment: str) -> Optional[CrewDB]:
        """First crew member (oldest row) whose name contains fragment, ignoring case."""
        async with self.db.session() as session:
            result = await session.execute(
                select(CrewDB)
                .where(func.lower(CrewDB.name).contains(fragment.lower(), autoescape=True))
                .order_by(CrewDB.id.asc())
                .limit(1)
            )
            return result.scalar_one_or_none()

    async def delete(self, member_id: int) -> int:
        """Delete a crew member. Returns the number of rows removed."""
        async with self.db.session() as session:
            result = await session.execute(
                delete(CrewDB).where(CrewDB.id == member_id)
            )
            logger.info(f"Deleted crew member {member_id} ({result.rowcount} row(s))")
            return result.rowcount

    async def count(self) -> int:
        async with self.db.session() as session:
            result = await session.execute(select(func.count()).select_from(CrewDB))
            return result.scalar_one()


# Singleton
_crew_repository: Optional[CrewRepository] = None


def get_crew_repository() -> CrewRepository:
    """Get the crew repository singleton."""
    global _crew_repository
    if _crew_repository is None:
        _crew_repository = CrewRepository()
    return _crew_repository
