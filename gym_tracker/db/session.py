"""Async engine, session factory and the FastAPI session dependency."""
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from gym_tracker.core.config import get_settings

Base = declarative_base()


def build_engine(url: str):
    """Create the async engine; SQLite gets a busy timeout so writers queue instead of failing."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["timeout"] = 15
    return create_async_engine(url, connect_args=connect_args, future=True)


def build_sessionmaker(bind) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


engine = build_engine(get_settings().database_url)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as db:
        yield db
