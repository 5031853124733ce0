"""
Task data models for tasklist.

Three related shapes live here:

- Task: the stored record, as returned by a storage backend
- TaskCreate: the body accepted when creating a task
- TaskUpdate: the body accepted when partially updating a task

The input models use strict types, so a JSON string "true" is not a
boolean and a number is not text. Blank-text checks are not part of
these models; the API layer applies them on creation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Task(BaseModel):
    """
    A stored task.

    Task instances are frozen so a record handed out by a backend cannot
    be changed behind the backend's back. Updates go through
    TaskStorage.update_task, which stores a new record.

    Example:
        >>> task = Task(id="4f1c...", text="Buy milk")
        >>> task.completed
        False
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique task identifier assigned on creation")
    text: str = Field(..., description="Task content")
    completed: bool = Field(default=False, description="Whether the task is done")


class TaskCreate(BaseModel):
    """Request body for creating a task."""

    model_config = ConfigDict(strict=True)

    text: str
    completed: bool | None = None

    @field_validator("completed")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v


class TaskUpdate(BaseModel):
    """
    Request body for a partial task update.

    Every field is optional. Fields left out of the request are not
    touched on the stored task; use ``changes()`` to get only the fields
    the caller actually sent.
    """

    model_config = ConfigDict(strict=True)

    text: str | None = None
    completed: bool | None = None

    @field_validator("text", "completed")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Omitting a field is fine, sending null for it is not."""
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v

    def changes(self) -> dict[str, Any]:
        """Return the fields explicitly set on this update."""
        return self.model_dump(exclude_unset=True)
