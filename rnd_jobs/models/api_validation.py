"""
Pydantic models for API endpoint input validation.

Request bodies use the client's camelCase field names; to_record() hands the
repositories snake_case column dicts.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .task import TaskStatus, TaskPriority, TaskCategory, DEFAULT_STAGE


class CamelPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> Dict[str, Any]:
        """Column dict with enum members flattened to their labels."""
        return self.model_dump(mode="json")


# ============================================
# TASKS
# ============================================

class TaskPayload(CamelPayload):
    """Full task record for create and update (update overwrites every field)."""
    title: str = Field(..., min_length=1, max_length=200)
    client_name: Optional[str] = Field(None, max_length=255)
    project_name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=20000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    category: TaskCategory = TaskCategory.PRODUK
    stage: str = Field(DEFAULT_STAGE, max_length=100)
    assignee: Optional[str] = Field(None, max_length=255)
    deadline: Optional[str] = Field(None, max_length=50)

    @field_validator("status", "priority", "category", "stage", mode="before")
    @classmethod
    def blank_to_default(cls, v, info):
        # null or "" means "use the default", as the board's forms send it
        if v is None or v == "":
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        stripped = v.strip()
        if not stripped:
            raise ValueError("title cannot be empty after stripping whitespace")
        return stripped


# ============================================
# CREW & CLIENTS
# ============================================

class CrewCreate(CamelPayload):
    """Input validation for creating crew members."""
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    photo: Optional[str] = Field(None, max_length=2000)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=1000)
    join_date: Optional[str] = Field(None, max_length=50)
    performance: int = Field(0, ge=0, le=100)

    @field_validator("name", "role")
    @classmethod
    def not_blank(cls, v):
        stripped = v.strip()
        if not stripped:
            raise ValueError("value cannot be empty after stripping whitespace")
        return stripped

    @field_validator("performance", mode="before")
    @classmethod
    def performance_default(cls, v):
        return 0 if v is None or v == "" else v


class ClientCreate(CamelPayload):
    """Input validation for creating clients."""
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        stripped = v.strip()
        if not stripped:
            raise ValueError("name cannot be empty after stripping whitespace")
        return stripped


# ============================================
# WEBHOOKS & SETTINGS
# ============================================

class EmailWebhookPayload(BaseModel):
    """Inbound email forwarded by the mail relay."""
    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(..., alias="from", max_length=320)
    subject: str = Field("", max_length=1000)
    body: str = Field("", max_length=100000)


class SpreadsheetSettingsUpdate(CamelPayload):
    spreadsheet_id: str = Field(..., max_length=200)
