# src/task_reminder/db/session.py
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, future=True)


def build_session_factory(bind: AsyncEngine) -> sessionmaker:
    """
    Async session factory bound to the given engine.
    """
    return sessionmaker(
        bind, class_=AsyncSession, expire_on_commit=False, autoflush=False, autocommit=False
    )


async def init_models(bind: AsyncEngine) -> None:
    """
    Create the task table if it does not exist yet.
    """
    # Register the mapped classes on Base.metadata before create_all
    from task_reminder.db import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
