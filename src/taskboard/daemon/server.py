"""FastAPI daemon server for taskboard."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.core.config import TaskboardConfig
from taskboard.core.exceptions import OverlapError, PersistenceError
from taskboard.daemon.routes.epics import router as epics_router
from taskboard.daemon.routes.subtasks import router as subtasks_router
from taskboard.daemon.routes.tasks import router as tasks_router
from taskboard.daemon.routes.views import router as views_router
from taskboard.daemon.state import DaemonState
from taskboard.storage.file_backed import FileBackedTaskManager
from taskboard.tasks.history import HistoryTracker
from taskboard.tasks.manager import TaskManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI lifespan handler for startup/shutdown."""
    state: DaemonState = app.state.daemon
    state.start_time = datetime.now()
    logger.info("Taskboard daemon started stats=%s", state.manager.get_stats())
    yield
    logger.info("Taskboard daemon stopped")


async def overlap_handler(request: Request, exc: OverlapError) -> JSONResponse:
    """Overlapping schedule is reported as 406 Not Acceptable."""
    return JSONResponse(
        status_code=406,
        content={"detail": exc.message, **exc.details},
    )


async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """A body that cannot be parsed into an item is a server-side failure."""
    logger.warning("Malformed request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=500,
        content={"detail": "Malformed request body", "errors": jsonable_errors(exc)},
    )


async def persistence_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Snapshot failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {"loc": ".".join(str(part) for part in err.get("loc", ())), "msg": str(err.get("msg", ""))}
        for err in exc.errors()
    ]


def create_app(manager: TaskManager | None = None) -> FastAPI:
    """
    Build the HTTP application around a task manager.

    Args:
        manager: Manager to serve; a fresh in-memory one when omitted

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Taskboard Daemon",
        description="Task, epic and subtask tracking API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.daemon = DaemonState(manager if manager is not None else TaskManager())

    app.add_exception_handler(OverlapError, overlap_handler)
    app.add_exception_handler(RequestValidationError, validation_handler)
    app.add_exception_handler(PersistenceError, persistence_handler)

    app.include_router(tasks_router)
    app.include_router(subtasks_router)
    app.include_router(epics_router)
    app.include_router(views_router)

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health check endpoint."""
        state: DaemonState = app.state.daemon
        with state.lock:
            stats = state.manager.get_stats()
        return {
            "status": "ok",
            "version": __version__,
            "uptime_seconds": round(state.uptime_seconds, 3),
            **stats,
        }

    return app


def build_manager(config: TaskboardConfig, data_file: Path | None = None) -> TaskManager:
    """Manager for a server run: file-backed when autosave is on."""
    history = HistoryTracker(limit=config.history.limit)
    if not config.storage.autosave and data_file is None:
        return TaskManager(history=history)
    path = data_file or Path(config.storage.data_file)
    return FileBackedTaskManager.open_or_create(path, history=history)


def run_server(
    config: TaskboardConfig | None = None,
    data_file: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the daemon server."""
    import uvicorn

    config = config or TaskboardConfig()
    app = create_app(build_manager(config, data_file))

    uvicorn.run(
        app,
        host=host or config.server.host,
        port=port or config.server.port,
        log_level=config.server.log_level,
    )
