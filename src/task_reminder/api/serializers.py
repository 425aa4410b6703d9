from datetime import datetime, timezone
from typing import Any, Dict, Optional

from task_reminder.db.models import Task
from .schemas import TaskCreate


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalise a timestamp for storage: aware values are converted to UTC,
    naive values are taken to already be UTC.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """
    ISO-8601 without offset. Seconds are always written; the fraction only
    when non-zero, with trailing zeros dropped (00:00:00.5, not 00:00:00.500000).
    """
    if value is None:
        return None
    text = value.replace(microsecond=0).isoformat()
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text


def task_from_request(payload: TaskCreate) -> Task:
    return Task(
        title=payload.title,
        email=payload.email,
        due_date=to_naive_utc(payload.due_date),
        notified=bool(payload.notified),
    )


def serialize_task(t: Task) -> Dict[str, Any]:
    return {
        "id": t.id,
        "title": t.title,
        "email": t.email,
        "dueDate": format_timestamp(t.due_date),
        "notified": bool(t.notified),
    }
