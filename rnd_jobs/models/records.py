"""
Record mapper between storage rows and the client view model.

Storage columns are snake_case (client_name, join_date, created_at); clients
see camelCase (clientName, joinDate, createdAt). The mapping is a pure rename
done through pydantic aliases, plus the derived crew tenure.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Iterable

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

from .crew import tenure_for, tenure_years as years_since_joining


class CamelModel(BaseModel):
    """Base model that reads snake_case attributes and speaks camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TaskView(CamelModel):
    id: int
    title: str
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    stage: Optional[str] = None
    assignee: Optional[str] = None
    deadline: Optional[str] = None
    created_at: Optional[datetime] = None


class CrewView(CamelModel):
    id: int
    name: str
    role: Optional[str] = None
    photo: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    join_date: Optional[str] = None
    performance: int = 0

    @computed_field
    @property
    def tenure(self) -> Optional[str]:
        category = tenure_for(self.join_date)
        return category.value if category else None

    @computed_field(alias="tenureYears")
    @property
    def tenure_years(self) -> Optional[float]:
        return years_since_joining(self.join_date)


class ClientView(CamelModel):
    id: int
    name: str


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def task_to_view(task: Any) -> Dict[str, Any]:
    """Shape a task row for clients."""
    return _dump(TaskView.model_validate(task))


def tasks_to_view(tasks: Iterable[Any]) -> List[Dict[str, Any]]:
    return [task_to_view(task) for task in tasks]


def crew_to_view(member: Any) -> Dict[str, Any]:
    """Shape a crew row for clients, including tenure."""
    return _dump(CrewView.model_validate(member))


def client_to_view(client: Any) -> Dict[str, Any]:
    return _dump(ClientView.model_validate(client))
