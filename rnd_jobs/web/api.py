"""
REST API for the job board.

Tasks, crew, clients, category pipelines and sample data. Responses use the
board's camelCase field names.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..database.seed import seed_sample_data
from ..models.api_validation import TaskPayload, CrewCreate, ClientCreate
from ..models.task import pipelines
from ..services.tasks import TaskService, get_task_service
from ..services.crew import CrewService, get_crew_service
from ..services.clients import ClientService, get_client_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ============================================================================
# Tasks
# ============================================================================

@router.get("/tasks")
async def list_tasks(service: TaskService = Depends(get_task_service)) -> List[Dict[str, Any]]:
    """All tasks, newest first."""
    return await service.list_tasks()


@router.post("/tasks")
async def create_task(payload: TaskPayload, service: TaskService = Depends(get_task_service)):
    task_id = await service.create_task(payload.to_record())
    return {"id": task_id}


@router.put("/tasks/{task_id}")
async def update_task(
    task_id: int,
    payload: TaskPayload,
    service: TaskService = Depends(get_task_service),
):
    """Overwrite a task. Unknown ids are not an error."""
    await service.update_task(task_id, payload.to_record())
    return {"success": True}


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    await service.delete_task(task_id)
    return {"success": True}


@router.get("/categories")
async def list_categories():
    """Stage pipeline per category, in board order."""
    return pipelines()


# ============================================================================
# Crew
# ============================================================================

@router.get("/crew")
async def list_crew(service: CrewService = Depends(get_crew_service)):
    return await service.list_crew()


@router.post("/crew")
async def create_crew(payload: CrewCreate, service: CrewService = Depends(get_crew_service)):
    member_id = await service.create_crew(payload.to_record())
    return {"id": member_id}


@router.delete("/crew/{member_id}")
async def delete_crew(member_id: int, service: CrewService = Depends(get_crew_service)):
    await service.delete_crew(member_id)
    return {"success": True}


# ============================================================================
# Clients
# ============================================================================

@router.get("/clients")
async def list_clients(service: ClientService = Depends(get_client_service)):
    return await service.list_clients()


@router.post("/clients")
async def create_client(payload: ClientCreate, service: ClientService = Depends(get_client_service)):
    """Add a client; an existing name returns the existing id."""
    client_id = await service.create_client(payload.name)
    return {"id": client_id}


# ============================================================================
# Sample data
# ============================================================================

@router.post("/seed")
async def seed(service: TaskService = Depends(get_task_service)):
    """Fill empty tables with sample data and push the new board state."""
    added = await seed_sample_data(service.repository.db)
    await service.run_post_commit_hooks("seed")
    return {
        "success": True,
        "message": "Database seeded with example data",
        "added": added,
    }
