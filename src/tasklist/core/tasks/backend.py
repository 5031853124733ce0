"""
Task storage protocol and registry.

This module defines the TaskStorage protocol that all storage backends
must implement, enabling pluggable task storage. Only the in-memory
backend ships today; the async signatures leave room for a backend
that does real I/O without changing callers.
"""

import os
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .models import Task, TaskCreate, TaskUpdate

DEFAULT_BACKEND = "memory"


@runtime_checkable
class TaskStorage(Protocol):
    """
    Protocol for task storage implementations.

    A backend is the sole owner of its task collection. It performs no
    validation beyond what the models enforce, and it never raises for a
    missing task: absence is reported through the return value.
    """

    async def list_tasks(self) -> list[Task]:
        """
        List every stored task.

        Returns:
            All tasks, in insertion order. Callers should not depend on
            the order.
        """
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """
        Get a task by ID.

        Args:
            task_id: Task identifier

        Returns:
            Task if found, None otherwise
        """
        ...

    async def create_task(self, data: TaskCreate) -> Task:
        """
        Create and store a new task.

        Assigns a fresh unique ID. ``completed`` defaults to False when
        not supplied.

        Args:
            data: Creation input

        Returns:
            The stored task
        """
        ...

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task | None:
        """
        Merge a partial update onto an existing task.

        Fields not set on ``updates`` keep their stored values. The task
        ID never changes.

        Args:
            task_id: Task to update
            updates: Fields to change

        Returns:
            Updated task, or None if no task has that ID (nothing changes)
        """
        ...

    async def delete_task(self, task_id: str) -> bool:
        """
        Delete a task.

        Args:
            task_id: Task to delete

        Returns:
            True if a task was removed, False if none had that ID
        """
        ...


# Backend registry
_backends: dict[str, type[TaskStorage]] = {}


def register_backend(name: str) -> Callable[[type[TaskStorage]], type[TaskStorage]]:
    """
    Decorator to register a storage backend implementation.

    Usage:
        @register_backend('memory')
        class MemoryBackend:
            async def list_tasks(self):
                ...

    Args:
        name: Backend name (e.g., 'memory')

    Returns:
        Decorator function
    """

    def decorator(backend_class: type[TaskStorage]) -> type[TaskStorage]:
        _backends[name] = backend_class
        return backend_class

    return decorator


def get_backend(name: str | None = None) -> TaskStorage:
    """
    Get a new storage backend instance by name.

    If name is not provided, uses the TASKLIST_BACKEND environment
    variable, falling back to the in-memory backend.

    Args:
        name: Backend name, or None to detect

    Returns:
        A fresh TaskStorage instance

    Raises:
        ValueError: If the backend is not registered
    """
    if name is None:
        name = os.environ.get("TASKLIST_BACKEND", "").lower() or DEFAULT_BACKEND

    backend_class = _backends.get(name)
    if backend_class is None:
        raise ValueError(
            f"Backend '{name}' not registered. Available backends: {', '.join(_backends.keys())}"
        )

    return backend_class()


def list_backends() -> list[str]:
    """
    List all registered backend names.

    Returns:
        List of backend names
    """
    return list(_backends.keys())


def is_backend_available(name: str) -> bool:
    """Check if a backend is registered."""
    return name in _backends
