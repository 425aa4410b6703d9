"""
FastAPI application entrypoint for the task-reminder service.

This module wires together:
- Logging configuration (rotating file under LOG_DIR)
- Request logging middleware
- The tasks router (POST /tasks)
- The periodic due-task check, started/stopped with the app
"""

import time
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import sessionmaker
from starlette.requests import Request

from task_reminder import __version__
from task_reminder.api.tasks import router as tasks_router
from task_reminder.config import Settings, load_settings
from task_reminder.db.session import build_engine, build_session_factory, init_models
from task_reminder.logging_config import get_logger, setup_logging
from task_reminder.notification_schedule import TaskNotificationSchedule
from task_reminder.services.tasks import TaskService

logger = get_logger("task_reminder")


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
    session_factory: Optional[sessionmaker] = None,
) -> FastAPI:
    """
    Build the application. Storage handles can be passed in explicitly;
    otherwise they are created from settings.database_url.
    """
    settings = settings or load_settings()

    # Configure logging before creating the app
    setup_logging(settings.log_level, settings.log_dir)

    if engine is None and session_factory is not None:
        # Startup and shutdown must act on the engine the requests use
        engine = session_factory.kw.get("bind")
    if engine is None:
        engine = build_engine(settings.database_url, echo=settings.sql_echo)
    if session_factory is None:
        session_factory = build_session_factory(engine)

    task_service = TaskService(session_factory)
    schedule = TaskNotificationSchedule(task_service, settings.task_check_interval_seconds)

    app = FastAPI(title="Task Reminder Service", version=__version__)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.task_service = task_service
    app.state.schedule = schedule

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Logs each request with its outcome: status code and handling time.
        """
        started = time.perf_counter()
        try:
            body = (await request.body()).decode(errors="ignore")[:200]
        except Exception:
            logger.exception("Failed to read request body for logging")
            body = "?"
        response = await call_next(request)
        logger.info(
            "HTTP %s %s from %s -> %s in %.1fms body=%s",
            request.method,
            request.url.path,
            request.client.host if request.client else "?",
            response.status_code,
            (time.perf_counter() - started) * 1000,
            body,
        )
        return response

    @app.get("/health")
    async def health():
        """
        Simple health check endpoint.
        """
        return {"status": "healthy"}

    app.include_router(tasks_router)

    @app.on_event("startup")
    async def on_startup():
        logger.info("Task reminder starting up (database=%s)", engine.url.render_as_string(hide_password=True))
        await init_models(engine)
        if settings.task_check_enabled:
            schedule.start()
        else:
            logger.warning("Due-task check disabled (TASK_CHECK_ENABLED=false)")

    @app.on_event("shutdown")
    async def on_shutdown():
        await schedule.stop()
        try:
            await engine.dispose()
        except Exception:
            logger.exception("Error disposing engine on shutdown")
        logger.info("Task reminder shutting down")

    return app


app = create_app()
