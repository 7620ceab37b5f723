"""
Notes Service — Storage Client
================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one explicitly
       constructed object instead of module-level globals.
How:   `Database` owns one async engine (and its connection pool) plus a
       session factory. The app factory builds it, stores it on `app.state`,
       and route handlers receive a per-request session through
       `get_db_session`.
When:  Constructed once per application; sessions are created per-request.

Backends:
    sqlite+aiosqlite    Embedded file database. SQLAlchemy picks its own
                        pool class, so pool sizing options are not passed.
    postgresql+asyncpg  Networked server behind a QueuePool sized from
                        settings (pool_size + max_overflow connections).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_service.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class Database:
    """
    Storage client shared by all requests.

    Responsibilities:
        - session(): scoped acquisition of a session, released on every exit path
        - create_schema(): creates missing tables at startup
        - dispose(): closes every pooled connection at shutdown
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        pool_timeout: int = 30,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo}

        # SQLite gets NullPool/StaticPool/QueuePool chosen by the dialect;
        # sizing arguments are only valid for the networked backends
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_timeout=pool_timeout,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_timeout=settings.db_pool_timeout,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def backend_name(self) -> str:
        return self.engine.url.get_backend_name()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Acquire a session for one operation.

        On error the open transaction is rolled back; the session is always
        closed, which returns its connection to the pool. Commits are issued
        by the service for write operations.
        """
        session = self.session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """
        Create the notes table (and its index) if it does not exist yet.

        Raises whatever the driver raises; the caller treats that as fatal.
        """
        # Registers Note with Base.metadata
        from notes_service.models import note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready (%s)", self.backend_name)

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            return await note_service.list_notes(db)
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
