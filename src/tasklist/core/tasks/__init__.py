"""
Task models and storage backends.

Importing this package registers the built-in backends.
"""

from .backend import (
    DEFAULT_BACKEND,
    TaskStorage,
    get_backend,
    is_backend_available,
    list_backends,
    register_backend,
)
from .memory import MemoryBackend
from .models import Task, TaskCreate, TaskUpdate

__all__ = [
    # Models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Storage
    "DEFAULT_BACKEND",
    "MemoryBackend",
    "TaskStorage",
    "get_backend",
    "is_backend_available",
    "list_backends",
    "register_backend",
]
