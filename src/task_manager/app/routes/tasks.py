from typing import Optional

from fastapi import APIRouter, Response, status as http_status
from task_manager.domain.task_models import Task, TaskCreate, TaskUpdate, TaskStatus, TaskPriority
from task_manager.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_service() -> TaskService:
    # Overwritten in main.py:
    # tasks.get_service = lambda: svc
    raise RuntimeError("TaskService not wired")


@router.post("", response_model=Task, status_code=http_status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate):
    return await get_service().create_task(payload)


@router.get("", response_model=list[Task])
async def list_tasks(status: Optional[TaskStatus] = None, priority: Optional[TaskPriority] = None):
    svc = get_service()
    if status is not None:
        return await svc.get_tasks_by_status(status)
    if priority is not None:
        return await svc.get_tasks_by_priority(priority)
    return await svc.get_all_tasks()


@router.get("/pending", response_model=list[Task])
async def list_pending_tasks():
    return await get_service().get_pending_tasks()


@router.get("/completed", response_model=list[Task])
async def list_completed_tasks():
    return await get_service().get_completed_tasks()


@router.get("/count")
async def count_tasks(status: Optional[TaskStatus] = None):
    svc = get_service()
    if status is not None:
        return {"count": await svc.count_tasks_by_status(status)}
    return {"count": await svc.count_tasks()}


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int):
    return await get_service().find_task_by_id(task_id)


@router.put("/{task_id}", response_model=Task)
async def update_task(task_id: int, payload: TaskUpdate):
    return await get_service().update_task(task_id, payload)


@router.post("/{task_id}/complete", response_model=Task)
async def complete_task(task_id: int):
    return await get_service().complete_task(task_id)


@router.post("/{task_id}/cancel", response_model=Task)
async def cancel_task(task_id: int):
    return await get_service().cancel_task(task_id)


@router.delete("/{task_id}", status_code=http_status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int):
    await get_service().delete_task(task_id)
    return Response(status_code=http_status.HTTP_204_NO_CONTENT)
