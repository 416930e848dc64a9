from __future__ import annotations
from typing import Dict, List, Optional
from datetime import datetime, timezone

from task_manager.domain.task_models import Task, TaskPriority, TaskStatus

class InMemoryTaskRepo:
    """
    Dict-backed TaskRepo for tests and `TASK_REPO=memory`.
    Stores and returns copies so callers never alias stored state.
    """
    def __init__(self):
        self._tasks: Dict[int, Task] = {}
        self._next_id = 1

    async def save(self, task: Task) -> Task:
        now = datetime.now(timezone.utc)
        stored = task.model_copy()
        if stored.id is None:
            stored.id = self._next_id
        # explicit ids move the sequence past them, like an autoincrement column
        self._next_id = max(self._next_id, stored.id + 1)
        if stored.created_at is None:
            stored.created_at = now
        stored.updated_at = now
        self._tasks[stored.id] = stored
        return stored.model_copy()

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        task = self._tasks.get(task_id)
        return task.model_copy() if task else None

    async def delete(self, task: Task) -> None:
        self._tasks.pop(task.id, None)

    def _newest_first(self, tasks) -> List[Task]:
        ordered = sorted(tasks, key=lambda t: (t.created_at, t.id), reverse=True)
        return [t.model_copy() for t in ordered]

    async def find_all_order_by_created_at_desc(self) -> List[Task]:
        return self._newest_first(self._tasks.values())

    async def find_by_status_order_by_created_at_desc(self, status: TaskStatus) -> List[Task]:
        return self._newest_first(t for t in self._tasks.values() if t.status == status)

    async def find_by_priority_order_by_created_at_desc(self, priority: TaskPriority) -> List[Task]:
        return self._newest_first(t for t in self._tasks.values() if t.priority == priority)

    async def count(self) -> int:
        return len(self._tasks)

    async def count_by_status(self, status: TaskStatus) -> int:
        return sum(1 for t in self._tasks.values() if t.status == status)
