# src/task_reminder/db/crud.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_reminder.db.models import Task


async def save_task(db: AsyncSession, task: Task) -> Task:
    db.add(task)
    await db.commit()
    await db.refresh(task)
    return task


async def get_task(db: AsyncSession, task_id: int) -> Optional[Task]:
    q = select(Task).where(Task.id == task_id)
    res = await db.execute(q)
    return res.scalars().first()


async def list_due_tasks(db: AsyncSession, as_of: datetime) -> List[Task]:
    """
    Tasks whose due date is at or before `as_of` and that are not notified yet.
    Tasks without a due date are never due.
    """
    q = (
        select(Task)
        .where(Task.due_date.is_not(None))
        .where(Task.due_date <= as_of)
        .where(Task.notified == False)  # noqa: E712
        .order_by(Task.due_date.asc(), Task.id.asc())
    )
    res = await db.execute(q)
    return list(res.scalars().all())


async def mark_notified(db: AsyncSession, task: Task) -> Task:
    # One-way: the flag is only ever set, never cleared
    if not task.notified:
        task.notified = True
        await db.commit()
        await db.refresh(task)
    return task
