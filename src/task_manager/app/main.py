import os
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from task_manager.app.routes import tasks
from task_manager.app.middleware.access_log import AccessLogMiddleware
from task_manager.domain.errors import TaskNotFoundError
from task_manager.infra.db.sqlite import make_sqlite_url, make_engine, make_sessionmaker, create_schema
from task_manager.infra.db.task_repo_memory import InMemoryTaskRepo
from task_manager.infra.db.task_repo_sqlite import SQLiteTaskRepo
from task_manager.services.task_service import TaskService
from task_manager.observability.logging import setup_logging

logger = logging.getLogger("tasks.system")


def create_app() -> FastAPI:
    setup_logging()
    backend = os.getenv("TASK_REPO", "sqlite").lower()
    logger.info("system.start", extra={"category": "system", "event": "system.start", "backend": backend})

    app = FastAPI(title="Task Manager")
    app.add_middleware(AccessLogMiddleware)

    if backend == "sqlite":
        db_path = os.getenv("DB_PATH", "./data/tasks.db")
        engine = make_engine(make_sqlite_url(db_path))
        repo = SQLiteTaskRepo(make_sessionmaker(engine))

        @app.on_event("startup")
        async def _startup():
            await create_schema(engine)
            logger.info(
                "db.ready",
                extra={"category": "system", "event": "db.ready", "db_path": db_path},
            )

        @app.on_event("shutdown")
        async def _shutdown():
            await engine.dispose()
    elif backend == "memory":
        repo = InMemoryTaskRepo()
    else:
        raise ValueError(f"Unknown TASK_REPO backend: {backend!r}")

    svc = TaskService(repo)
    tasks.get_service = lambda: svc
    app.include_router(tasks.router)

    @app.exception_handler(TaskNotFoundError)
    async def _task_not_found(request: Request, exc: TaskNotFoundError):
        return JSONResponse(status_code=404, content={"detail": "Task not found"})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
