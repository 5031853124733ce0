"""FastAPI dependencies shared by the API routes."""

from fastapi import Request

from tasklist.core.tasks.backend import TaskStorage


def get_storage(request: Request) -> TaskStorage:
    """Return the storage backend the app was created with."""
    storage: TaskStorage = request.app.state.storage
    return storage
