from typing import AsyncGenerator
import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from book_api.config import get_settings
from book_api.database.base import Base

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_sqlite(engine: AsyncEngine) -> None:
    """
    Make an aiosqlite engine behave like the production store.

    - `PRAGMA foreign_keys=ON`: SQLite ignores FOREIGN KEY clauses unless asked.
    - Emit BEGIN ourselves: the sqlite3 driver's implicit transaction handling breaks
      SAVEPOINT semantics (RELEASE of the first savepoint would commit everything).

    No-op for any other dialect.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,  # Enables connection health checks
    )
    configure_sqlite(engine)
    return engine


engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)

# `expire_on_commit=False` keeps loaded attributes readable after commit; repositories
# return entities straight after committing them.
AsyncSessionMaker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields one session per request and closes it afterwards.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with AsyncSessionMaker() as session:
        yield session


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create all tables that do not exist yet. There is no migration support."""
    # Import for the side effect of registering every model on Base.metadata
    from book_api import models  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database.tables_ready", extra={"tables": sorted(Base.metadata.tables)})
