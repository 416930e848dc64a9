from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

# Attributes every LogRecord carries; anything else came in through `extra`.
_BUILTIN_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

LOG_FILE_NAME = "tasks.jsonl"
LOG_FILE_MAX_BYTES = 10_000_000
LOG_FILE_BACKUPS = 10


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for k, v in record.__dict__.items():
            if k not in _BUILTIN_ATTRS:
                payload[k] = v

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        # datetimes and enums from extras go out as strings
        return json.dumps(payload, ensure_ascii=False, default=str)


def _attach(root: logging.Logger, handler: logging.Handler, level: str, fmt: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(fmt)
    root.addHandler(handler)


def setup_logging() -> Path:
    """Route every logger through JSON lines on stderr and `$LOG_DIR/tasks.jsonl`."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_path = Path(os.getenv("LOG_DIR", "./logs")) / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    # create_app may run more than once per process
    root.handlers.clear()

    fmt = JsonFormatter()
    _attach(root, logging.StreamHandler(), level, fmt)
    _attach(
        root,
        RotatingFileHandler(log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"),
        level,
        fmt,
    )

    # request lines come from AccessLogMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)
    logging.getLogger("uvicorn.error").setLevel(level)
    return log_path
