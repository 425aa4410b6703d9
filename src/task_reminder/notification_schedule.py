"""
Periodic due-task check.

Runs TaskService.send_notification_for_due_tasks on a fixed interval inside
the application's event loop. A failing tick is logged and the loop keeps
going; cancellation (shutdown) ends it.
"""

import asyncio
from typing import Optional

from task_reminder.logging_config import get_logger
from task_reminder.services.tasks import TaskService

logger = get_logger("task_reminder.schedule")


class TaskNotificationSchedule:
    def __init__(self, task_service: TaskService, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be > 0, got {interval_seconds}")
        self.task_service = task_service
        self.interval_seconds = float(interval_seconds)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def check_and_notify_tasks(self) -> None:
        await self.task_service.send_notification_for_due_tasks()

    async def _run(self) -> None:
        while True:
            try:
                await self.check_and_notify_tasks()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception("Due-task check failed: %s", e)

            await asyncio.sleep(self.interval_seconds)

    def start(self) -> asyncio.Task:
        """
        Start the periodic loop. Calling start() while running returns the
        existing loop task.
        """
        if self.running:
            return self._task
        logger.info("Starting due-task check every %.3fs", self.interval_seconds)
        self._task = asyncio.create_task(self._run(), name="task-notification-schedule")
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        # CancelledError is the expected outcome here
        await asyncio.gather(task, return_exceptions=True)
        logger.info("Due-task check stopped")
