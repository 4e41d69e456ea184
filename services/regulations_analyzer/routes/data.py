"""
Data Management Routes
======================

API endpoints for schema initialization, background imports and data
status.

Version: 0.1.0
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status

from services.regulations_analyzer.dependencies import (
    get_database,
    get_importer_factory,
    get_store,
)
from services.regulations_analyzer.importer import DataImporter
from services.regulations_analyzer.store import RegulationStore
from shared.database import DatabaseClient
from shared.logging import get_logger
from shared.models import ActionResponse, DataStatus


logger = get_logger(__name__)

router = APIRouter()


@dataclass
class ImportState:
    """Progress of the most recent background import."""

    running: bool = False
    last_report: dict[str, Any] | None = None
    last_error: str | None = None


def get_import_state(request: Request) -> ImportState:
    return request.app.state.import_state


async def run_import(importer: DataImporter, state: ImportState) -> None:
    """
    Run an import pass in the background and record its outcome.

    Failures are recorded on the import state and reported through
    ``GET /status``.
    """
    state.running = True
    state.last_error = None
    try:
        report = await importer.run()
        state.last_report = report.to_dict()
    except Exception as e:
        state.last_error = str(e)
        logger.error("background_import_failed", error=str(e), error_type=type(e).__name__)
    finally:
        state.running = False


@router.post("/import", response_model=ActionResponse, status_code=status.HTTP_202_ACCEPTED)
async def start_import(
    background_tasks: BackgroundTasks,
    importer_factory: Callable[[], DataImporter] = Depends(get_importer_factory),
    state: ImportState = Depends(get_import_state),
) -> ActionResponse:
    """Start an import pass in the background."""
    if state.running:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An import is already running",
        )

    # Marked here so a second request cannot start before the task runs
    state.running = True
    background_tasks.add_task(run_import, importer_factory(), state)

    logger.info("import_requested")

    return ActionResponse(
        message="Data import started in background",
        note="Check GET /api/data/status for progress",
    )


@router.post("/init", response_model=ActionResponse)
async def initialize_database(db: DatabaseClient = Depends(get_database)) -> ActionResponse:
    """Create any missing tables."""
    await db.create_schema()
    return ActionResponse(message="Database initialized successfully")


@router.get("/status", response_model=DataStatus)
async def get_status(
    store: RegulationStore = Depends(get_store),
    state: ImportState = Depends(get_import_state),
) -> DataStatus:
    """Stored agency and regulation counts plus import state."""
    agencies, regulations = await store.counts()
    return DataStatus(
        agencies=agencies,
        regulations=regulations,
        has_data=agencies > 0 and regulations > 0,
        import_running=state.running,
        last_import=state.last_report,
        last_error=state.last_error,
    )
