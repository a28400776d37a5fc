from typing import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from recordkit.config.settings import get_settings


@lru_cache()
def get_engine() -> AsyncEngine:
    """Create the AsyncEngine lazily so importing this module never connects."""
    settings = get_settings()
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,   # Set to False in production
        pool_pre_ping=True,              # Enables connection health checks
    )


@lru_cache()
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session and ensure it's closed afterwards.

    Usage:
        async for db in get_async_session():
            store = SqlAlchemyRecordStore(Account, db)
    """
    async with get_sessionmaker()() as session:
        yield session
