"""
Q&A Backend: Database Handle and Session Management
====================================================

What:  The process-wide `Database` handle (async engine + connection pool +
       session factory) and the FastAPI dependency that hands each request
       its own session.
How:   main.py's lifespan creates one `Database` at startup, stores it on
       `app.state.database`, and disposes it on shutdown. Handlers never
       touch a module-level engine; they receive a session through
       `get_db_session`, which reads the handle from the running app.
Who:   Lifespan (create/dispose), route handlers (via Depends), tests
       (inject a handle pointing at a throwaway database).

Connection Pooling:
    pool_size + max_overflow bounds how many store calls run at once.
    Callers beyond that wait inside the pool for up to pool_timeout seconds.
    pool_pre_ping validates a connection before handing it out.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from qanda.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register their tables on `Base.metadata`, which
    `Database.create_schema()` uses to bootstrap an empty database.
    """
    pass


class Database:
    """
    Owns the async engine and its connection pool for the life of the process.

    Lifecycle:
        db = Database.from_settings(settings)   # startup
        await db.create_schema()                # optional bootstrap
        async with db.session_factory() as s:   # per request
            ...
        await db.dispose()                      # shutdown, drains the pool
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_timeout: int = 30,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=3600,
            echo=echo,
        )
        # expire_on_commit=False: rows stay readable after the write commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            url=settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def create_schema(self) -> None:
        """
        Create the four tables if they are missing.

        This is a bootstrap for empty databases, not a migration system:
        existing tables are left untouched.
        """
        # Importing the models registers their tables on Base.metadata
        import qanda.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))

    async def ping(self) -> bool:
        """Run SELECT 1 on a pooled connection. Used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close every pooled connection. Called once during shutdown."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Returns the handle the lifespan (or a test) attached to the app."""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database handle is not initialised; is the lifespan running?")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the app's Database handle
        2. Yields it to the route handler (services commit their own writes)
        3. On error: rolls back, so a failed request leaves no partial writes
        4. Always: closes the session, returning the connection to the pool
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
