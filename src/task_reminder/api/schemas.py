from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """
    Wire payload for POST /tasks. Every field is optional; nothing is validated
    beyond type coercion.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, examples=["Pay rent"])
    email: Optional[str] = Field(None, examples=["a@b.com"])
    due_date: Optional[datetime] = Field(None, alias="dueDate", examples=["2024-01-01T00:00:00"])
    # Client-supplied and stored as-is, so a task can be created already notified
    notified: Optional[bool] = False


class TaskOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: Optional[str] = None
    email: Optional[str] = None
    # Already formatted by serializers.format_timestamp
    due_date: Optional[str] = Field(None, alias="dueDate", examples=["2024-01-01T00:00:00"])
    notified: bool
