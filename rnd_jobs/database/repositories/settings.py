"""
Repository for process-wide key/value settings.

Well-known keys:
- spreadsheet_id: target Google Sheets document
- google_tokens: stored Google OAuth tokens (JSON)
- last_sync: ISO timestamp of the last successful mirror run
"""

import json
import logging
from typing import Optional, Any

from sqlalchemy import select

from config import settings as app_settings
from ..connection import Database, get_database
from ..models import SettingDB

logger = logging.getLogger(__name__)

SPREADSHEET_ID = "spreadsheet_id"
GOOGLE_TOKENS = "google_tokens"
LAST_SYNC = "last_sync"


class SettingsRepository:
    """Repository for key/value settings."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    async def get(self, key: str) -> Optional[str]:
        """Get a setting value, or None when the key is absent."""
        async with self.db.session() as session:
            result = await session.execute(
                select(SettingDB.value).where(SettingDB.key == key)
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, value: Optional[str]) -> None:
        """Insert or replace a setting."""
        async with self.db.session() as session:
            await session.merge(SettingDB(key=key, value=value))
        logger.debug(f"Setting {key} stored")

    async def get_json(self, key: str) -> Optional[Any]:
        """Get a JSON-encoded setting. Unparseable values read as None."""
        raw = await self.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Setting {key} is not valid JSON: {e}")
            return None

    async def set_json(self, key: str, value: Any) -> None:
        await self.set(key, json.dumps(value))

    async def seed_defaults(self) -> None:
        """Store the configured spreadsheet id on first boot."""
        if await self.get(SPREADSHEET_ID) is None and app_settings.default_spreadsheet_id:
            await self.set(SPREADSHEET_ID, app_settings.default_spreadsheet_id)
            logger.info("Seeded default spreadsheet_id")


# Singleton
_settings_repository: Optional[SettingsRepository] = None


def get_settings_repository() -> SettingsRepository:
    """Get the settings repository singleton."""
    global _settings_repository
    if _settings_repository is None:
        _settings_repository = SettingsRepository()
    return _settings_repository
