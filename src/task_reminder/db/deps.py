# src/task_reminder/db/deps.py
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Async DB session dependency for FastAPI routes.

    Uses the session factory the application was created with.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session
