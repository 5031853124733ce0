"""
Task API routes.

Provides the CRUD endpoints for tasks:
- GET /api/tasks - List all tasks
- GET /api/tasks/{id} - Get a single task
- POST /api/tasks - Create a task
- PUT /api/tasks/{id} - Partially update a task
- DELETE /api/tasks/{id} - Delete a task

Request bodies are validated here, not in the storage backend. Storage
failures are logged and reported as a generic 500 for the operation;
the underlying error text is never returned to the client.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from tasklist.core.api.deps import get_storage
from tasklist.core.tasks.backend import TaskStorage
from tasklist.core.tasks.models import Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

Storage = Annotated[TaskStorage, Depends(get_storage)]
RawBody = Annotated[Any, Body()]

TASK_NOT_FOUND = "Task not found"
EMPTY_TEXT = "Task text cannot be empty"


def _parse(model: type[BaseModel], payload: Any) -> Any:
    """
    Validate a raw JSON body against an input model.

    Raises:
        RequestValidationError: With the validator's error list, rendered
            as a 400 by the app's validation handler
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(
            e.errors(include_url=False, include_context=False)
        ) from e


@router.get("/tasks", response_model=list[Task])
async def list_tasks(storage: Storage) -> list[Task]:
    """List every task."""
    try:
        return await storage.list_tasks()
    except Exception as e:
        logger.exception("Listing tasks failed")
        raise HTTPException(status_code=500, detail="Failed to fetch tasks") from e


@router.get("/tasks/{task_id}", response_model=Task)
async def get_task(task_id: str, storage: Storage) -> Task:
    """
    Get a single task.

    Raises:
        HTTPException: 404 if no task has this ID, 500 on storage failure
    """
    try:
        task = await storage.get_task(task_id)
    except Exception as e:
        logger.exception("Fetching task %s failed", task_id)
        raise HTTPException(status_code=500, detail="Failed to fetch task") from e

    if task is None:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return task


@router.post("/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(storage: Storage, payload: RawBody = None) -> Task:
    """
    Create a task.

    Example request:
        POST /api/tasks
        {"text": "Buy milk"}

    Raises:
        RequestValidationError: 400 if the body doesn't match TaskCreate
        HTTPException: 400 if text is blank, 500 on storage failure
    """
    data: TaskCreate = _parse(TaskCreate, payload)

    if not data.text.strip():
        raise HTTPException(status_code=400, detail=EMPTY_TEXT)

    try:
        task = await storage.create_task(data)
    except Exception as e:
        logger.exception("Creating task failed")
        raise HTTPException(status_code=500, detail="Failed to create task") from e

    logger.info("Created task %s", task.id)
    return task


@router.put("/tasks/{task_id}", response_model=Task)
async def update_task(task_id: str, storage: Storage, payload: RawBody = None) -> Task:
    """
    Partially update a task.

    Only the fields present in the body change; a request with no body
    changes nothing. Blank text is accepted here, the emptiness check
    applies on creation only.

    Example request:
        PUT /api/tasks/4f1c...
        {"completed": true}

    Raises:
        RequestValidationError: 400 if the body doesn't match TaskUpdate
        HTTPException: 404 if no task has this ID, 500 on storage failure
    """
    updates: TaskUpdate = _parse(TaskUpdate, {} if payload is None else payload)

    try:
        task = await storage.update_task(task_id, updates)
    except Exception as e:
        logger.exception("Updating task %s failed", task_id)
        raise HTTPException(status_code=500, detail="Failed to update task") from e

    if task is None:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return task


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, storage: Storage) -> Response:
    """
    Delete a task.

    Raises:
        HTTPException: 404 if no task has this ID, 500 on storage failure
    """
    try:
        deleted = await storage.delete_task(task_id)
    except Exception as e:
        logger.exception("Deleting task %s failed", task_id)
        raise HTTPException(status_code=500, detail="Failed to delete task") from e

    if not deleted:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)

    logger.info("Deleted task %s", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
