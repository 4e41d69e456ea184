"""
Request Dependencies
====================

FastAPI dependencies shared by the analyzer routes.

Version: 0.1.0
"""

from collections.abc import Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from services.regulations_analyzer.importer import DataImporter
from services.regulations_analyzer.metrics.text import round_half_up
from services.regulations_analyzer.store import RegulationStore
from shared.database import DatabaseClient, get_db_session


async def get_store(db: AsyncSession = Depends(get_db_session)) -> RegulationStore:
    """Store bound to the request's session."""
    return RegulationStore(db)


def get_database(request: Request) -> DatabaseClient:
    return request.app.state.db


def get_importer_factory(request: Request) -> Callable[[], DataImporter]:
    return request.app.state.importer_factory


def as_int(value: float) -> int:
    """Round half-up to a whole number."""
    return int(round_half_up(value, 0))


def content_preview(content: str | None, length: int) -> str:
    if not content:
        return "No content"
    return content[:length] + "..."
