"""
Todo API - Database Engine & Session Management
=================================================

What:  Async SQLAlchemy engine, session factory and lifecycle helpers.
How:   `Database` owns one async engine (and therefore one connection pool)
       plus the session factory the durable repositories draw from. It is
       built once at wiring time and shared by both database repositories.
When:  Built by `create_default_app()`; readiness is checked and tables are
       created in the app lifespan; disposed on shutdown.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs (used by the test suite) skip the sizing options.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from todo_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers its table on `Base.metadata`, which
    `Database.create_tables()` uses to create missing tables.
    """
    pass


class Database:
    """
    Holds the async engine and session factory for one database.

    Usage:
        database = Database.from_settings(settings)
        async with database.session_factory.begin() as session:
            await session.execute(...)
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: returned rows stay readable after commit
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create the engine for `settings.database_url` with pool options applied."""
        return cls.from_url(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ) -> "Database":
        """Create the engine for `url`; pool sizing is ignored for SQLite."""
        engine_kwargs = {"pool_pre_ping": pool_pre_ping, "echo": echo}

        # SQLite pools are chosen by the dialect; sizing only applies elsewhere
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs["pool_recycle"] = 3600
            if pool_size is not None:
                engine_kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                engine_kwargs["max_overflow"] = max_overflow

        return cls(create_async_engine(url, **engine_kwargs))

    async def wait_until_ready(
        self,
        max_attempts: int = 5,
        min_wait: int = 1,
        max_wait: int = 10,
    ) -> None:
        """
        Block until the database answers `SELECT 1`.

        How:     Retries with exponential backoff and jitter (tenacity).
        Raises:  The last connection error once `max_attempts` is exhausted.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential_jitter(initial=min_wait, max=max_wait),
            retry=retry_if_exception_type((SQLAlchemyError, OSError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                async with self.engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
        logger.info("Database is reachable")

    async def create_tables(self) -> None:
        """Create every table registered on `Base.metadata` that does not exist yet."""
        # Models register themselves on import
        from todo_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready: %s", ", ".join(sorted(Base.metadata.tables)))

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
