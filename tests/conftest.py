# tests/conftest.py

from __future__ import annotations

import os
import tempfile

import pytest

# Importing task_manager.app.main builds the module-level app, so logging and
# the backend must point somewhere harmless before collection.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="task-manager-logs-"))
os.environ.setdefault("TASK_REPO", "memory")

from task_manager.domain.task_models import Task, TaskPriority, TaskStatus  # noqa: E402


@pytest.fixture()
def task() -> Task:
    return Task(
        id=1,
        title="Test Task",
        description="Test Description",
        status=TaskStatus.pending,
        priority=TaskPriority.medium,
    )
