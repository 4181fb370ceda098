"""Crew service. Crew changes are not broadcast."""

import logging
from typing import Any, Dict, List, Optional

from ..database.repositories.crew import CrewRepository, get_crew_repository
from ..database.models import CrewDB
from ..models.records import crew_to_view

logger = logging.getLogger(__name__)


class CrewService:
    def __init__(self, repository: CrewRepository):
        self.repository = repository

    async def list_crew(self) -> List[Dict[str, Any]]:
        """All crew ordered by name, with derived tenure."""
        return [crew_to_view(member) for member in await self.repository.get_all()]

    async def create_crew(self, fields: Dict[str, Any]) -> int:
        member = await self.repository.create(fields)
        return member.id

    async def delete_crew(self, member_id: int) -> int:
        return await self.repository.delete(member_id)

    async def find_by_name_fragment(self, fragment: str) -> Optional[CrewDB]:
        """Case-insensitive substring lookup; blank fragments match nobody."""
        fragment = (fragment or "").strip()
        if not fragment:
            return None
        return await self.repository.find_by_name_fragment(fragment)


# Singleton
_crew_service: Optional[CrewService] = None


def get_crew_service() -> CrewService:
    global _crew_service
    if _crew_service is None:
        _crew_service = CrewService(get_crew_repository())
    return _crew_service
