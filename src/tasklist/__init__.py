"""
Tasklist - a small task tracking service

A JSON API for creating, listing, updating and deleting short text tasks.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from tasklist.core.tasks.models import Task, TaskCreate, TaskUpdate

__all__ = ["Task", "TaskCreate", "TaskUpdate", "__version__"]
