"""
SQLAlchemy models for the job manager store.

Schema includes:
- Tasks (work orders moving through a category pipeline)
- Crew members
- Clients
- Key/value settings

No foreign keys: tasks reference clients and crew by name.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String,
    Text,
    Integer,
    DateTime,
    Index,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# ==================== TASKS ====================

class TaskDB(Base):
    """A work order tracked on the board."""
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)  # SPK/SPD code
    client_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    project_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[Optional[str]] = mapped_column(String(50), default="To Do", server_default="To Do")
    priority: Mapped[Optional[str]] = mapped_column(String(50), default="Medium", server_default="Medium")
    category: Mapped[Optional[str]] = mapped_column(String(50), default="Produk", server_default="Produk")
    stage: Mapped[Optional[str]] = mapped_column(String(100), default="Inbox", server_default="Inbox")

    assignee: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # Crew name or department
    deadline: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # Date text

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    __table_args__ = (
        Index("idx_tasks_created_at", "created_at"),
    )


# ==================== CREW ====================

class CrewDB(Base):
    """Workshop crew member."""
    __tablename__ = "crew"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # URL
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    join_date: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # YYYY-MM-DD
    performance: Mapped[int] = mapped_column(Integer, default=0, server_default="0")  # 0-100


# ==================== CLIENTS ====================

class ClientDB(Base):
    """Client the workshop produces for."""
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)


# ==================== SETTINGS ====================

class SettingDB(Base):
    """Process-wide key/value settings (spreadsheet id, tokens, last sync)."""
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
