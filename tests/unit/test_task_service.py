"""
Tests for TaskService: post-commit hooks and the full-list broadcast.
"""

import pytest
from unittest.mock import AsyncMock

from rnd_jobs.services.tasks import TaskService


@pytest.fixture
def task_service(task_repo, mock_hub):
    return TaskService(task_repo, mock_hub)


@pytest.mark.asyncio
async def test_create_broadcasts_full_list_once(task_service, mock_hub):
    task_id = await task_service.create_task({"title": "SPK-2024-001"})

    mock_hub.broadcast_tasks.assert_awaited_once()
    (tasks,) = mock_hub.broadcast_tasks.await_args.args
    assert [t["id"] for t in tasks] == [task_id]
    assert tasks[0]["stage"] == "Inbox"


@pytest.mark.asyncio
async def test_update_and_delete_each_broadcast_once(task_service, mock_hub):
    task_id = await task_service.create_task({"title": "SPK-2024-001"})
    mock_hub.broadcast_tasks.reset_mock()

    await task_service.update_task(task_id, {"title": "SPK-2024-001", "status": "Done"})
    assert mock_hub.broadcast_tasks.await_count == 1
    (tasks,) = mock_hub.broadcast_tasks.await_args.args
    assert tasks[0]["status"] == "Done"

    await task_service.delete_task(task_id)
    assert mock_hub.broadcast_tasks.await_count == 2
    assert mock_hub.broadcast_tasks.await_args.args == ([],)


@pytest.mark.asyncio
async def test_missing_ids_still_notify(task_service, mock_hub):
    assert await task_service.update_task(404, {"title": "Ghost"}) == 0
    assert await task_service.delete_task(404) == 0

    assert mock_hub.broadcast_tasks.await_count == 2


@pytest.mark.asyncio
async def test_list_tasks_uses_client_field_names(task_service, sample_task_data):
    await task_service.create_task(sample_task_data)

    (task,) = await task_service.list_tasks()

    assert task["clientName"] == "Kriya Nusantara"
    assert task["projectName"] == "Plakat Logam"
    assert "createdAt" in task
    assert "client_name" not in task


@pytest.mark.asyncio
async def test_hooks_run_in_order(task_repo, mock_hub):
    calls = []

    async def first():
        calls.append("first")

    async def second():
        calls.append("second")

    service = TaskService(task_repo, mock_hub, post_commit_hooks=[first, second])
    await service.create_task({"title": "SPK-2024-002"})

    assert calls == ["first", "second"]
    # Explicit hook list replaces the default broadcast
    mock_hub.broadcast_tasks.assert_not_awaited()


@pytest.mark.asyncio
async def test_failing_hook_does_not_fail_mutation(task_service, mock_hub, task_repo):
    mirror_hook = AsyncMock(side_effect=RuntimeError("sheets down"))
    later_hook = AsyncMock()
    task_service.add_post_commit_hook(mirror_hook)
    task_service.add_post_commit_hook(later_hook)

    task_id = await task_service.create_task({"title": "SPK-2024-003"})

    assert task_id is not None
    assert await task_repo.count() == 1
    mock_hub.broadcast_tasks.assert_awaited_once()
    later_hook.assert_awaited_once()
