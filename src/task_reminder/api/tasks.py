from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from task_reminder.db import crud
from task_reminder.db.deps import get_db
from task_reminder.logging_config import get_logger
from .schemas import TaskCreate, TaskOut
from .serializers import serialize_task, task_from_request

logger = get_logger("task_reminder.api.tasks")

router = APIRouter(tags=["tasks"])


@router.post("/tasks", response_model=TaskOut)
async def create_task(payload: TaskCreate, db=Depends(get_db)):
    """
    Persist a new task and return it with its generated id.
    """
    logger.info(
        "Creating task title=%r email=%r due_date=%s notified=%s",
        payload.title,
        payload.email,
        payload.due_date,
        payload.notified,
    )
    task = task_from_request(payload)
    try:
        task = await crud.save_task(db, task)
    except SQLAlchemyError as e:
        logger.exception("create_task: failed to save task: %s", e)
        await db.rollback()
        raise HTTPException(status_code=500, detail="Failed to save task")

    logger.info("Created task id=%s due_date=%s", task.id, task.due_date)
    return serialize_task(task)
