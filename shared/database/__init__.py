"""
Database Module
===============

Async relational database access (SQLAlchemy 2.0; aiosqlite or asyncpg).

Usage:
    from shared.database import DatabaseClient, get_db_session

    # In FastAPI
    @app.get("/example")
    async def example(
        db: AsyncSession = Depends(get_db_session),
    ):
        result = await db.execute(select(Agency))
        ...
"""

from shared.database.sql import (
    Base,
    DatabaseClient,
    get_db_session,
)


__all__ = [
    "Base",
    "DatabaseClient",
    "get_db_session",
]
