"""
Task service: the due-task side of the reminder workflow.

Selecting due tasks is real; notifying is a stub. The default notifier only
logs each due task and nothing marks a task as notified, so running the check
leaves stored state untouched.
"""

from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from task_reminder.db import crud
from task_reminder.db.models import Task
from task_reminder.logging_config import get_logger

logger = get_logger("task_reminder.services.tasks")

Notifier = Callable[[Task], Awaitable[None]]


def utc_now() -> datetime:
    """Current time as naive UTC, matching how due dates are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


async def log_due_task(task: Task) -> None:
    # No transport exists; recording the task is all this step does
    logger.info(
        "Task due (notification not sent): id=%s title=%r email=%r due_date=%s",
        task.id,
        task.title,
        task.email,
        task.due_date,
    )


class TaskService:
    def __init__(self, session_factory: sessionmaker, notifier: Optional[Notifier] = None):
        self.session_factory = session_factory
        self.notifier = notifier or log_due_task

    async def find_due_tasks(self, as_of: Optional[datetime] = None) -> List[Task]:
        as_of = as_of or utc_now()
        async with self.session_factory() as db:
            return await crud.list_due_tasks(db, as_of)

    async def send_notification_for_due_tasks(self, as_of: Optional[datetime] = None) -> int:
        """
        Hand every due task to the notifier.

        Returns the number of due tasks found. A failing notifier call is
        logged and the remaining tasks are still processed; storage errors
        propagate to the caller.
        """
        as_of = as_of or utc_now()
        try:
            due = await self.find_due_tasks(as_of)
        except SQLAlchemyError as e:
            logger.exception("Failed to load due tasks as_of=%s: %s", as_of, e)
            raise

        if not due:
            logger.debug("No due tasks as_of=%s", as_of)
            return 0

        logger.info("Found %d due task(s) as_of=%s", len(due), as_of)
        for task in due:
            try:
                await self.notifier(task)
            except Exception as e:
                logger.exception("Notifier failed for task id=%s: %s", task.id, e)
        return len(due)
