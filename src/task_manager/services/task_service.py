import logging
from datetime import datetime, timezone
from typing import Callable, List

from task_manager.domain.errors import TaskNotFoundError
from task_manager.domain.task_models import Task, TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from task_manager.domain.task_repo import TaskRepo

logger = logging.getLogger("tasks.service")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    def __init__(self, repo: TaskRepo, clock: Callable[[], datetime] = _utcnow):
        self.repo = repo
        self.clock = clock

    async def _require(self, task_id: int) -> Task:
        task = await self.repo.find_by_id(task_id)
        if task is None:
            logger.warning(
                "task.not_found",
                extra={"category": "tasks", "event": "task.not_found", "task_id": task_id},
            )
            raise TaskNotFoundError(task_id)
        return task

    async def create_task(self, data: TaskCreate) -> Task:
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status or TaskStatus.pending,
            priority=data.priority or TaskPriority.medium,
        )
        saved = await self.repo.save(task)
        logger.info(
            "task.create",
            extra={"category": "tasks", "event": "task.create", "task_id": saved.id, "title": saved.title},
        )
        return saved

    async def update_task(self, task_id: int, patch: TaskUpdate) -> Task:
        task = await self._require(task_id)
        # Plain overwrite: no transition checks, completed_at left alone.
        task.title = patch.title
        task.description = patch.description
        task.status = patch.status
        task.priority = patch.priority
        saved = await self.repo.save(task)
        logger.info(
            "task.update",
            extra={"category": "tasks", "event": "task.update", "task_id": task_id, "status": saved.status},
        )
        return saved

    async def complete_task(self, task_id: int) -> Task:
        task = await self._require(task_id)
        task.status = TaskStatus.completed
        task.completed_at = self.clock()
        saved = await self.repo.save(task)
        logger.info("task.complete", extra={"category": "tasks", "event": "task.complete", "task_id": task_id})
        return saved

    async def cancel_task(self, task_id: int) -> Task:
        task = await self._require(task_id)
        task.status = TaskStatus.cancelled
        saved = await self.repo.save(task)
        logger.info("task.cancel", extra={"category": "tasks", "event": "task.cancel", "task_id": task_id})
        return saved

    async def delete_task(self, task_id: int) -> None:
        task = await self._require(task_id)
        await self.repo.delete(task)
        logger.info("task.delete", extra={"category": "tasks", "event": "task.delete", "task_id": task_id})

    async def find_task_by_id(self, task_id: int) -> Task:
        return await self._require(task_id)

    async def get_all_tasks(self) -> List[Task]:
        return await self.repo.find_all_order_by_created_at_desc()

    async def get_tasks_by_status(self, status: TaskStatus) -> List[Task]:
        return await self.repo.find_by_status_order_by_created_at_desc(status)

    async def get_tasks_by_priority(self, priority: TaskPriority) -> List[Task]:
        return await self.repo.find_by_priority_order_by_created_at_desc(priority)

    async def get_pending_tasks(self) -> List[Task]:
        return await self.repo.find_by_status_order_by_created_at_desc(TaskStatus.pending)

    async def get_completed_tasks(self) -> List[Task]:
        return await self.repo.find_by_status_order_by_created_at_desc(TaskStatus.completed)

    async def count_tasks(self) -> int:
        return await self.repo.count()

    async def count_tasks_by_status(self, status: TaskStatus) -> int:
        return await self.repo.count_by_status(status)
