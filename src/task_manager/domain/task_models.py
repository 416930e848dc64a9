from __future__ import annotations
from pydantic import BaseModel, Field
from enum import Enum
from datetime import datetime
from typing import Optional

class TaskStatus(str, Enum):
    pending = "PENDING"
    in_progress = "IN_PROGRESS"
    completed = "COMPLETED"
    cancelled = "CANCELLED"

class TaskPriority(str, Enum):
    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"

class TaskCreate(BaseModel):
    # titles are free text; only the column width is enforced
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=4000)
    # None means "use the default" (pending / medium)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None

class TaskUpdate(BaseModel):
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=4000)
    status: TaskStatus
    priority: TaskPriority

class Task(TaskCreate):
    id: Optional[int] = None
    status: TaskStatus
    priority: TaskPriority
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
