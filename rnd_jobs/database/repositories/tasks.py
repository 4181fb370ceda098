"""
Task repository.

Handles:
- Task CRUD operations
- Default status/priority/category/stage on insert
- Full-record overwrite on update (no existence check)
"""

import logging
from typing import Optional, List, Dict, Any

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError

from ..connection import Database, get_database
from ..models import TaskDB
from ..exceptions import DatabaseConstraintError, DatabaseOperationError

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "To Do"
DEFAULT_PRIORITY = "Medium"
DEFAULT_CATEGORY = "Produk"
DEFAULT_STAGE = "Inbox"

# Columns overwritten by update(); id and created_at are immutable
MUTABLE_COLUMNS = (
    "title",
    "client_name",
    "project_name",
    "description",
    "status",
    "priority",
    "category",
    "stage",
    "assignee",
    "deadline",
)


class TaskRepository:
    """Repository for task operations."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    # ==================== TASK CRUD ====================

    async def create(self, task_data: Dict[str, Any]) -> TaskDB:
        """Create a new task. Empty status/priority/category/stage fall back to defaults."""
        async with self.db.session() as session:
            try:
                task = TaskDB(
                    title=task_data.get("title"),
                    client_name=task_data.get("client_name"),
                    project_name=task_data.get("project_name"),
                    description=task_data.get("description"),
                    status=task_data.get("status") or DEFAULT_STATUS,
                    priority=task_data.get("priority") or DEFAULT_PRIORITY,
                    category=task_data.get("category") or DEFAULT_CATEGORY,
                    stage=task_data.get("stage") or DEFAULT_STAGE,
                    assignee=task_data.get("assignee"),
                    deadline=task_data.get("deadline"),
                )
                session.add(task)
                await session.flush()
                await session.refresh(task)

                logger.info(f"Created task {task.id} ({task.title})")
                return task

            except IntegrityError as e:
                logger.error(f"Constraint violation creating task: {e}")
                raise DatabaseConstraintError(
                    f"Cannot create task {task_data.get('title')!r}: constraint violation"
                )

            except Exception as e:
                logger.error(f"CRITICAL: Task creation failed: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to create task: {e}")

    async def get_all(self) -> List[TaskDB]:
        """Get all tasks, newest first. Ties on created_at go to the later insert."""
        async with self.db.session() as session:
            result = await session.execute(
                select(TaskDB).order_by(TaskDB.created_at.desc(), TaskDB.id.desc())
            )
            return list(result.scalars().all())

    async def update(self, task_id: int, task_data: Dict[str, Any]) -> int:
        """
        Overwrite every mutable column of a task.

        Columns missing from task_data are written as NULL. Returns the number
        of rows affected, which is 0 for an unknown id.
        """
        values = {column: task_data.get(column) for column in MUTABLE_COLUMNS}

        async with self.db.session() as session:
            try:
                result = await session.execute(
                    update(TaskDB)
                    .where(TaskDB.id == task_id)
                    .values(**values)
                )
                logger.info(f"Updated task {task_id} ({result.rowcount} row(s))")
                return result.rowcount

            except IntegrityError as e:
                logger.error(f"Constraint violation updating task {task_id}: {e}")
                raise DatabaseConstraintError(f"Cannot update task {task_id}: constraint violation")

            except Exception as e:
                logger.error(f"CRITICAL: Task update failed for {task_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to update task {task_id}: {e}")

    async def delete(self, task_id: int) -> int:
        """Delete a task. Returns the number of rows removed."""
        async with self.db.session() as session:
            try:
                result = await session.execute(
                    delete(TaskDB).where(TaskDB.id == task_id)
                )
                logger.info(f"Deleted task {task_id} ({result.rowcount} row(s))")
                return result.rowcount

            except Exception as e:
                logger.error(f"CRITICAL: Task deletion failed for {task_id}: {e}", exc_info=True)
                raise DatabaseOperationError(f"Failed to delete task {task_id}: {e}")

    async def count(self) -> int:
        """Number of stored tasks."""
        async with self.db.session() as session:
            result = await session.execute(select(func.count()).select_from(TaskDB))
            return result.scalar_one()


# Singleton
_task_repository: Optional[TaskRepository] = None


def get_task_repository() -> TaskRepository:
    """Get the task repository singleton."""
    global _task_repository
    if _task_repository is None:
        _task_repository = TaskRepository()
    return _task_repository
