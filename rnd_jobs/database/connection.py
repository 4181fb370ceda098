"""
Engine and session handling for the job store.

The default store is a single SQLite file opened through aiosqlite.
PostgreSQL URLs also work and are pointed at asyncpg. Tables are created on
first use; there are no migrations.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from config import settings
from .exceptions import DatabaseConnectionError
from .models import Base

logger = logging.getLogger(__name__)


def normalize_database_url(database_url: str) -> str:
    """Map plain driver URLs to their async drivers."""
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


class Database:
    """Owns the async engine and hands out short-lived sessions."""

    def __init__(self, database_url: Optional[str] = None, null_pool: Optional[bool] = None):
        self.database_url = normalize_database_url(database_url or settings.database_url)
        # NullPool keeps connections from outliving the event loop that opened them
        self.null_pool = settings.environment == "test" if null_pool is None else null_pool
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._ready = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def initialize(self) -> bool:
        """Create the engine and any missing tables. Returns False on failure."""
        if self._ready:
            return True

        if not self.database_url:
            logger.warning("No DATABASE_URL set")
            return False

        options: Dict[str, Any] = {"echo": settings.database_echo}
        if self.null_pool:
            options["poolclass"] = NullPool
        elif not self.is_sqlite:
            options["pool_pre_ping"] = True

        try:
            self.engine = create_async_engine(self.database_url, **options)
            self.session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.error(f"Could not open store at {self.database_url}: {e}")
            return False

        self._ready = True
        logger.info(f"Store ready ({'sqlite' if self.is_sqlite else 'postgresql'}, null_pool={self.null_pool})")
        return True

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self._ready = False
            logger.info("Store closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """One unit of work: commits when the block exits, rolls back if it raises."""
        if not self._ready:
            await self.initialize()

        if not self.session_factory:
            raise DatabaseConnectionError("Store is not initialized")

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error(f"Rolled back session: {e}")
                raise

    async def health_check(self) -> Dict[str, Any]:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

        return {
            "status": "healthy",
            "initialized": self._ready,
            "backend": "sqlite" if self.is_sqlite else "postgresql",
        }


# Singleton
_database: Optional[Database] = None


def get_database() -> Database:
    """Get the store singleton."""
    global _database
    if _database is None:
        _database = Database()
    return _database


async def init_database() -> bool:
    return await get_database().initialize()


async def close_database() -> None:
    """Close the store and drop the singleton."""
    global _database
    if _database:
        await _database.close()
        _database = None
