"""
SQL Database Client
===================

Async relational database client using SQLAlchemy 2.0.

SQLite (aiosqlite) is the default backend; PostgreSQL (asyncpg) is
selected by pointing DATABASE_URL at a ``postgresql+asyncpg://`` URL.

Version: 0.1.0
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from shared.config import DatabaseSettings
from shared.logging import get_logger


logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for ORM models."""

    pass


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseClient:
    """
    Async database client wrapper.

    Owns one engine and its session factory. Instances are created
    explicitly (application lifespan, scripts, tests) and passed to
    whatever needs sessions.
    """

    def __init__(self, config: DatabaseSettings) -> None:
        """
        Initialize the client.

        Args:
            config: Database settings (URL, echo, pool sizing)
        """
        self.config = config
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the async engine."""
        if self._engine is None:
            kwargs: dict[str, Any] = {"echo": self.config.echo}

            if self.config.is_sqlite:
                if self.config.sqlite_path is None:
                    # In-memory databases live on a single shared connection
                    kwargs["poolclass"] = StaticPool
                else:
                    self.config.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
            else:
                kwargs.update(
                    pool_size=self.config.pool_size,
                    max_overflow=self.config.max_overflow,
                    pool_pre_ping=True,
                    pool_recycle=3600,
                )

            self._engine = create_async_engine(self.config.url, **kwargs)

            if self.config.is_sqlite:
                event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

            logger.info(
                "database_engine_created",
                backend=self._engine.dialect.name,
                database_url=self.config.url,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    async def create_schema(self) -> None:
        """Create all tables registered on ``Base`` that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_schema_created", tables=sorted(Base.metadata.tables))

    async def drop_schema(self) -> None:
        """Drop all tables registered on ``Base``."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("database_schema_dropped")

    async def close(self) -> None:
        """Close the engine and release all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("database_engine_closed")

    async def health_check(self) -> dict[str, Any]:
        """
        Check database health.

        Returns:
            dict with status and latency
        """
        try:
            start = time.perf_counter()
            async with self.session_factory() as session:
                result = await session.execute(text("SELECT 1"))
                _ = result.scalar()
            latency_ms = (time.perf_counter() - start) * 1000

            return {
                "status": "healthy",
                "latency_ms": round(latency_ms, 2),
                "backend": self.engine.dialect.name,
            }
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e),
            }

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for sessions that commits on success.

        Usage:
            async with db.session() as session:
                result = await session.execute(select(Agency))
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that yields a session from the application's database client.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    client: DatabaseClient = request.app.state.db
    async with client.session() as session:
        yield session
