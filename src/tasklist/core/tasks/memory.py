"""
In-memory task backend.

Keeps tasks in a dict keyed by ID for the life of the process. Nothing
is persisted; a restart starts from an empty collection.

The methods are async to satisfy TaskStorage, but none of them awaits,
so on a single event loop each call runs to completion before another
request can observe the collection.
"""

import logging
import uuid

from .backend import register_backend
from .models import Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


@register_backend("memory")
class MemoryBackend:
    """
    Task backend that stores tasks in process memory.

    Text is stored as given. Rejecting blank text is the API layer's job,
    so calling create_task directly with "" stores an empty task.

    Example:
        >>> backend = MemoryBackend()
        >>> task = await backend.create_task(TaskCreate(text="Buy milk"))
        >>> await backend.get_task(task.id) == task
        True
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def _new_id(self) -> str:
        # uuid4 collisions are not a practical concern, but never hand out a live ID
        task_id = str(uuid.uuid4())
        while task_id in self._tasks:
            task_id = str(uuid.uuid4())
        return task_id

    def count(self) -> int:
        """Return the number of stored tasks."""
        return len(self._tasks)

    async def list_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    async def get_task(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    async def create_task(self, data: TaskCreate) -> Task:
        task = Task(
            id=self._new_id(),
            text=data.text,
            completed=data.completed if data.completed is not None else False,
        )
        self._tasks[task.id] = task
        logger.debug("Created task %s", task.id)
        return task

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task | None:
        task = self._tasks.get(task_id)
        if task is None:
            return None

        changes = updates.changes()
        updated = task.model_copy(update=changes)
        self._tasks[task_id] = updated
        logger.debug("Updated task %s: %s", task_id, sorted(changes))
        return updated

    async def delete_task(self, task_id: str) -> bool:
        if self._tasks.pop(task_id, None) is None:
            return False
        logger.debug("Deleted task %s", task_id)
        return True
