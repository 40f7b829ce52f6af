"""
Core pytest configuration for the entire test suite.

Only the database setup and logging live here. Domain fixtures (repositories and
entity factories, API client) live in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py
"""

import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block above the book_api imports: silences third-party loggers before
# they are first configured.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, async_sessionmaker

from book_api.config import get_settings
from book_api.core.logging.builder import setup_logging
from book_api.database.base import Base
from book_api.database.session import build_engine
from book_api import models  # noqa: F401  (registers every table on Base.metadata)

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the application's dictConfig logging for the whole session, then put
    pytest's capture handler back on the root logger so `caplog.records` keeps working.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """Scheme, host, port and database only; credentials stripped."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    Priority:
    1. `TEST_DATABASE_URL` environment variable (CI override)
    2. the app's DATABASE_URL when TESTING=true and TEST_POSTGRES_DB is set
    3. a local SQLite file through aiosqlite
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url

    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL

    return "sqlite+aiosqlite:///./test_database.db"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture(scope="session")
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    # build_engine also turns on SQLite foreign keys and savepoint-safe transactions
    engine = build_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Transaction-per-test.

    The session joins an outer connection-level transaction in "create_savepoint"
    mode: every `commit()` the repositories issue only releases a SAVEPOINT, every
    `rollback()` only rolls back to it, and the outer transaction is rolled back at
    the end of the test so no row survives it.
    """
    async with async_engine.connect() as connection:
        await connection.begin()

        maker = async_sessionmaker(
            bind=connection,
            class_=AsyncSession,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        session: AsyncSession = maker()

        try:
            yield session
        finally:
            await session.close()
            await connection.rollback()


# Shared fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    fake,
    country_repository,
    category_repository,
    author_repository,
    book_repository,
    reviewer_repository,
    review_repository,
    make_country,
    make_category,
    make_author,
    make_book,
    make_reviewer,
    make_review,
)
from .test_fixtures.api_fixtures import client  # noqa: E402,F401
