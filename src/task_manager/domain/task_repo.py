from __future__ import annotations
from typing import List, Optional, Protocol

from task_manager.domain.task_models import Task, TaskPriority, TaskStatus


class TaskRepo(Protocol):
    """
    Persistence contract consumed by TaskService.

    `save` assigns an id (and created_at) on first save and refreshes
    updated_at every time. Records handed out are copies; changes only
    reach storage through another `save`.
    """

    async def save(self, task: Task) -> Task: ...

    async def find_by_id(self, task_id: int) -> Optional[Task]: ...

    async def delete(self, task: Task) -> None: ...

    async def find_all_order_by_created_at_desc(self) -> List[Task]: ...

    async def find_by_status_order_by_created_at_desc(self, status: TaskStatus) -> List[Task]: ...

    async def find_by_priority_order_by_created_at_desc(self, priority: TaskPriority) -> List[Task]: ...

    async def count(self) -> int: ...

    async def count_by_status(self, status: TaskStatus) -> int: ...
