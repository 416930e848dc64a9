from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy import Integer, String, Text, DateTime, func, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from task_manager.domain.task_models import Task, TaskStatus, TaskPriority


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops the offset, so values are written and read back as UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    pass


class TaskRow(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    priority: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def apply(self, task: Task) -> None:
        self.title = task.title
        self.description = task.description
        self.status = task.status.value
        self.priority = task.priority.value
        self.completed_at = _as_utc(task.completed_at)

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            status=TaskStatus(self.status),
            priority=TaskPriority(self.priority),
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
            completed_at=_as_utc(self.completed_at),
        )


_NEWEST_FIRST = (TaskRow.created_at.desc(), TaskRow.id.desc())


class SQLiteTaskRepo:
    def __init__(self, sessionmaker):
        self.sessionmaker = sessionmaker

    async def save(self, task: Task) -> Task:
        now = datetime.now(timezone.utc)
        async with self.sessionmaker() as session:
            row = await session.get(TaskRow, task.id) if task.id is not None else None
            if row is None:
                row = TaskRow(id=task.id, created_at=_as_utc(task.created_at) or now)
                session.add(row)
            row.apply(task)
            row.updated_at = now
            await session.commit()
            return row.to_domain()

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        async with self.sessionmaker() as session:
            row = await session.get(TaskRow, task_id)
            return row.to_domain() if row else None

    async def delete(self, task: Task) -> None:
        async with self.sessionmaker() as session:
            row = await session.get(TaskRow, task.id)
            if row is not None:
                await session.delete(row)
                await session.commit()

    async def _list(self, *criteria) -> List[Task]:
        async with self.sessionmaker() as session:
            stmt = select(TaskRow).order_by(*_NEWEST_FIRST)
            if criteria:
                stmt = stmt.where(*criteria)
            res = await session.execute(stmt)
            return [r.to_domain() for r in res.scalars().all()]

    async def find_all_order_by_created_at_desc(self) -> List[Task]:
        return await self._list()

    async def find_by_status_order_by_created_at_desc(self, status: TaskStatus) -> List[Task]:
        return await self._list(TaskRow.status == status.value)

    async def find_by_priority_order_by_created_at_desc(self, priority: TaskPriority) -> List[Task]:
        return await self._list(TaskRow.priority == priority.value)

    async def _count(self, *criteria) -> int:
        async with self.sessionmaker() as session:
            stmt = select(func.count()).select_from(TaskRow)
            if criteria:
                stmt = stmt.where(*criteria)
            res = await session.execute(stmt)
            return res.scalar_one()

    async def count(self) -> int:
        return await self._count()

    async def count_by_status(self, status: TaskStatus) -> int:
        return await self._count(TaskRow.status == status.value)
