"""
Test Configuration
==================

Pytest fixtures for regulations analyzer tests.

Every database fixture runs against a fresh in-memory SQLite database.
"""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["IMPORT_USE_LIVE_SOURCE"] = "false"

import services.regulations_analyzer.models  # noqa: E402,F401
from services.regulations_analyzer.importer import DataImporter  # noqa: E402
from services.regulations_analyzer.routes.data import ImportState  # noqa: E402
from services.regulations_analyzer.sources import CFRTitle  # noqa: E402
from services.regulations_analyzer.store import RegulationStore  # noqa: E402
from shared.config import DatabaseSettings, ImportSettings  # noqa: E402
from shared.database import DatabaseClient  # noqa: E402
from tests.factories import StaticSource, make_title  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[DatabaseClient, None]:
    """Database client with a freshly created schema."""
    client = DatabaseClient(DatabaseSettings(url="sqlite+aiosqlite:///:memory:"))
    await client.create_schema()
    yield client
    await client.close()


@pytest_asyncio.fixture
async def session(db: DatabaseClient) -> AsyncGenerator[AsyncSession, None]:
    """A plain session; tests control commits."""
    async with db.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def store(session: AsyncSession) -> RegulationStore:
    return RegulationStore(session)


@pytest.fixture
def import_settings() -> ImportSettings:
    """Live-source import settings with the default pacing."""
    return ImportSettings(
        use_live_source=True,
        max_parts_per_title=3,
        title_delay_seconds=0.2,
        part_delay_seconds=0.3,
    )


@pytest.fixture
def sample_titles() -> list[CFRTitle]:
    """Two small titles: three parts and one part."""
    return [
        make_title(7, "Agriculture", ["10", "20", "30"]),
        make_title(40, "Protection of Environment", ["60"], sections_per_part=3),
    ]


@pytest.fixture
def importer_factory(
    db: DatabaseClient,
    sample_titles: list[CFRTitle],
) -> Callable[[], DataImporter]:
    def factory() -> DataImporter:
        return DataImporter(
            session_scope=db.session,
            live_source=None,
            fallback_source=StaticSource(sample_titles),
            settings=ImportSettings(use_live_source=False),
        )

    return factory


@pytest.fixture
def analyzer_app(
    db: DatabaseClient,
    importer_factory: Callable[[], DataImporter],
) -> FastAPI:
    """Application wired to the test database without running its lifespan."""
    from services.regulations_analyzer.main import create_app

    app = create_app()
    app.state.db = db
    app.state.importer_factory = importer_factory
    app.state.import_state = ImportState()
    return app


@pytest_asyncio.fixture
async def analyzer_client(analyzer_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the Regulations Analyzer Service."""
    async with AsyncClient(
        transport=ASGITransport(app=analyzer_app),
        base_url="http://test",
    ) as client:
        yield client
