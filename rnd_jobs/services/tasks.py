"""
Task service.

CRUD over the tasks table. Every successful mutation runs the post-commit
hook list in order: by default the full-list broadcast, plus the spreadsheet
mirror when wired by get_task_service(). Hooks are best-effort; a failing
hook is logged and never fails the mutation.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from ..database.repositories.tasks import TaskRepository, get_task_repository
from ..models.records import tasks_to_view
from .notifier import NotificationHub, get_notification_hub

logger = logging.getLogger(__name__)

PostCommitHook = Callable[[], Awaitable[Any]]


class TaskService:
    """Task operations with post-commit side effects."""

    def __init__(
        self,
        repository: TaskRepository,
        hub: NotificationHub,
        post_commit_hooks: Optional[Sequence[PostCommitHook]] = None,
    ):
        self.repository = repository
        self.hub = hub
        if post_commit_hooks is None:
            post_commit_hooks = [self.broadcast_tasks]
        self.post_commit_hooks: List[PostCommitHook] = list(post_commit_hooks)

    def add_post_commit_hook(self, hook: PostCommitHook) -> None:
        self.post_commit_hooks.append(hook)

    async def list_tasks(self) -> List[Dict[str, Any]]:
        """All tasks, newest first, in the client's field names."""
        return tasks_to_view(await self.repository.get_all())

    async def create_task(self, fields: Dict[str, Any]) -> int:
        """Insert a task and return its id."""
        task = await self.repository.create(fields)
        await self.run_post_commit_hooks(f"create {task.id}")
        return task.id

    async def update_task(self, task_id: int, fields: Dict[str, Any]) -> int:
        """Overwrite a task. Unknown ids affect 0 rows and still notify."""
        affected = await self.repository.update(task_id, fields)
        if not affected:
            logger.warning(f"Update of task {task_id} matched no rows")
        await self.run_post_commit_hooks(f"update {task_id}")
        return affected

    async def delete_task(self, task_id: int) -> int:
        """Delete a task. Unknown ids affect 0 rows and still notify."""
        affected = await self.repository.delete(task_id)
        if not affected:
            logger.warning(f"Delete of task {task_id} matched no rows")
        await self.run_post_commit_hooks(f"delete {task_id}")
        return affected

    async def broadcast_tasks(self) -> int:
        """Push the full current task list to every connected client."""
        return await self.hub.broadcast_tasks(await self.list_tasks())

    async def run_post_commit_hooks(self, reason: str) -> None:
        for hook in self.post_commit_hooks:
            try:
                await hook()
            except Exception as e:
                hook_name = getattr(hook, "__name__", repr(hook))
                logger.error(f"Post-commit hook {hook_name} failed after {reason}: {e}", exc_info=True)


# Singleton
_task_service: Optional[TaskService] = None


def get_task_service() -> TaskService:
    """Get the task service singleton, wired to the fanout and the sheet mirror."""
    global _task_service
    if _task_service is None:
        from ..integrations.sheets import get_spreadsheet_mirror

        _task_service = TaskService(get_task_repository(), get_notification_hub())
        _task_service.add_post_commit_hook(get_spreadsheet_mirror().request_sync)
    return _task_service
