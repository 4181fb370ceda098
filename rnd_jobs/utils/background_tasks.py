"""
Fire-and-forget asyncio tasks for side effects that must not block a request
(the Sheets mirror). Failures are logged with a traceback instead of being
lost, and running tasks are held in a module set so they are not collected
mid-flight and can be awaited at shutdown.
"""

import asyncio
import logging
from typing import Any, Coroutine, Set

logger = logging.getLogger(__name__)

_running: Set[asyncio.Task] = set()


async def safe_background_task(coro: Coroutine, task_name: str) -> Any:
    """Await coro; on failure log it and return None."""
    try:
        outcome = await coro
    except Exception as e:
        logger.error(f"Background task {task_name} failed: {e}", exc_info=True)
        return None
    logger.debug(f"Background task {task_name} finished")
    return outcome


def create_safe_task(coro: Coroutine, task_name: str) -> asyncio.Task:
    """
    Schedule coro on the running loop.

    Example:
        create_safe_task(mirror.sync(), "sheets-mirror")
    """
    task = asyncio.create_task(safe_background_task(coro, task_name), name=task_name)
    _running.add(task)
    task.add_done_callback(_running.discard)
    return task


async def drain_background_tasks(timeout: float = 10.0) -> None:
    """Give in-flight tasks up to timeout seconds, then cancel the rest."""
    if not _running:
        return
    logger.info(f"Waiting for {len(_running)} background task(s)")
    _, unfinished = await asyncio.wait(set(_running), timeout=timeout)
    for task in unfinished:
        logger.warning(f"Cancelling background task {task.get_name()}")
        task.cancel()
