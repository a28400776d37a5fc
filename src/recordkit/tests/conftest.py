"""
Core pytest configuration for the entire test suite.

This module provides the database setup and logging configuration shared by
all tests. Domain-specific fixtures live in tests/test_fixtures/ and are
registered at the bottom of this file.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Silence noisy third-party loggers before importing modules that initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)

from recordkit.database.base import Base
from recordkit.tests.test_fixtures import models  # noqa: F401 – import to register models with Base.metadata
from recordkit.config.settings import get_settings
from recordkit.core.logging.builder import setup_logging

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session, so the same
    formatters and filters used by the application are active in tests.
    """
    setup_logging(get_settings())
    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------

# CI can point TEST_DATABASE_URL at a real server (e.g. postgresql+asyncpg://...);
# the default is a private in-memory SQLite database per test.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine_kwargs = {}
    if ":memory:" in TEST_DATABASE_URL:
        # one shared connection, otherwise every checkout would see an empty database
        engine_kwargs["poolclass"] = StaticPool

    engine = create_async_engine(TEST_DATABASE_URL, **engine_kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Session bound to a single connection inside an outer transaction that is
    rolled back after the test, so nothing a test writes leaks into the next one.
    """
    async with async_engine.connect() as connection:
        await connection.begin()

        maker = async_sessionmaker(bind=connection, class_=AsyncSession, expire_on_commit=False)
        session: AsyncSession = maker()

        try:
            yield session
        finally:
            await session.close()
            await connection.rollback()


# Store / verifier test fixtures
from .test_fixtures.store_fixtures import (  # noqa: E402,F401
    verifier,
    sample_records,
    memory_store,
    spy_store,
    account_store,
    create_account,
    seeded_accounts,
)
