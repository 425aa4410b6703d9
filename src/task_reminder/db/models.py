# src/task_reminder/db/models.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String

from task_reminder.db.session import Base


class Task(Base):
    __tablename__ = "task"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=True)
    email = Column(String, nullable=True)
    # Naive UTC; see api.serializers.task_from_request
    due_date = Column(DateTime, nullable=True, index=True)
    notified = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} due_date={self.due_date} notified={self.notified}>"
