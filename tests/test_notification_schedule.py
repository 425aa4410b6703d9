"""Due-task service and periodic checker tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from task_reminder.db import crud
from task_reminder.db.models import Task
from task_reminder.notification_schedule import TaskNotificationSchedule
from task_reminder.services.tasks import TaskService, utc_now


async def _seed(session_factory, count: int, *, due_in: timedelta) -> None:
    async with session_factory() as db:
        for i in range(count):
            await crud.save_task(
                db,
                Task(title=f"task-{i}", email=f"u{i}@example.com", due_date=utc_now() + due_in),
            )


async def _snapshot(session_factory):
    async with session_factory() as db:
        res = await db.execute(select(Task).order_by(Task.id))
        return [(t.id, t.title, t.email, t.due_date, t.notified) for t in res.scalars().all()]


async def test_find_due_tasks_uses_current_time(session_factory) -> None:
    await _seed(session_factory, 2, due_in=timedelta(minutes=-1))
    await _seed(session_factory, 1, due_in=timedelta(hours=1))

    due = await TaskService(session_factory).find_due_tasks()

    assert len(due) == 2


async def test_send_notification_passes_each_due_task_to_notifier(session_factory) -> None:
    await _seed(session_factory, 3, due_in=timedelta(minutes=-1))
    seen = []

    async def notifier(task: Task) -> None:
        seen.append(task.title)

    count = await TaskService(session_factory, notifier=notifier).send_notification_for_due_tasks()

    assert count == 3
    assert seen == ["task-0", "task-1", "task-2"]


async def test_failing_notifier_does_not_stop_remaining_tasks(session_factory) -> None:
    await _seed(session_factory, 2, due_in=timedelta(minutes=-1))
    seen = []

    async def notifier(task: Task) -> None:
        seen.append(task.title)
        if task.title == "task-0":
            raise RuntimeError("smtp down")

    count = await TaskService(session_factory, notifier=notifier).send_notification_for_due_tasks()

    assert count == 2
    assert seen == ["task-0", "task-1"]


@pytest.mark.parametrize("due_count", [0, 1, 25])
async def test_check_changes_nothing_regardless_of_due_tasks(session_factory, due_count) -> None:
    await _seed(session_factory, due_count, due_in=timedelta(days=-1))
    await _seed(session_factory, 2, due_in=timedelta(days=1))
    before = await _snapshot(session_factory)
    schedule = TaskNotificationSchedule(TaskService(session_factory), interval_seconds=60)

    await schedule.check_and_notify_tasks()
    await schedule.check_and_notify_tasks()

    assert await _snapshot(session_factory) == before


async def test_storage_error_propagates_from_service() -> None:
    class BrokenSession:
        async def __aenter__(self):
            raise OperationalError("SELECT", {}, Exception("no such table: task"))

        async def __aexit__(self, *exc):
            return False

    service = TaskService(lambda: BrokenSession())

    with pytest.raises(OperationalError, match="no such table"):
        await service.send_notification_for_due_tasks(as_of=datetime(2024, 1, 1))


async def test_interval_must_be_positive(session_factory) -> None:
    with pytest.raises(ValueError):
        TaskNotificationSchedule(TaskService(session_factory), interval_seconds=0)


class _CountingService:
    def __init__(self, fail_first: bool = False):
        self.calls = 0
        self.fail_first = fail_first
        self.ticked = asyncio.Event()

    async def send_notification_for_due_tasks(self):
        self.calls += 1
        if self.calls >= 3:
            self.ticked.set()
        if self.fail_first and self.calls == 1:
            raise RuntimeError("boom")
        return 0


async def test_loop_keeps_running_after_failed_tick() -> None:
    service = _CountingService(fail_first=True)
    schedule = TaskNotificationSchedule(service, interval_seconds=0.01)

    schedule.start()
    try:
        await asyncio.wait_for(service.ticked.wait(), timeout=2)
    finally:
        await schedule.stop()

    assert service.calls >= 3
    assert not schedule.running


async def test_start_twice_reuses_loop_and_stop_is_idempotent() -> None:
    schedule = TaskNotificationSchedule(_CountingService(), interval_seconds=60)

    first = schedule.start()
    second = schedule.start()
    assert first is second
    assert schedule.running

    await schedule.stop()
    await schedule.stop()
    assert first.cancelled()
    assert not schedule.running
