# tests/test_logging.py

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

from task_manager.domain.task_models import TaskStatus
from task_manager.observability.logging import JsonFormatter, setup_logging


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("tasks.service", logging.INFO, __file__, 1, msg, None, None)
    record.__dict__.update(extra)
    return record


def test_formatter_emits_extras_as_json() -> None:
    line = JsonFormatter().format(
        _record("task.update", category="tasks", event="task.update", task_id=7, status=TaskStatus.completed)
    )

    payload = json.loads(line)
    assert payload["msg"] == "task.update"
    assert payload["logger"] == "tasks.service"
    assert payload["level"] == "INFO"
    assert payload["ts"].endswith("Z")
    assert payload["category"] == "tasks"
    assert payload["task_id"] == 7
    assert payload["status"] == "COMPLETED"
    assert "lineno" not in payload
    assert "args" not in payload


def test_formatter_includes_exception_text() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("tasks.access", logging.ERROR, __file__, 1, "request.error", None, sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc"]


def test_setup_logging_writes_jsonl_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "debug")

    log_path = setup_logging()
    logging.getLogger("tasks.system").info("system.start", extra={"category": "system", "event": "system.start"})
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert log_path.name == "tasks.jsonl"
    assert logging.getLogger().level == logging.DEBUG
    assert json.loads(lines[-1])["event"] == "system.start"


def test_setup_logging_twice_keeps_one_pair_of_handlers(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

    setup_logging()
    setup_logging()

    handlers = logging.getLogger().handlers
    assert len(handlers) == 2
    assert all(isinstance(h.formatter, JsonFormatter) for h in handlers)
