"""
Regulations Routes
==================

API endpoints for browsing regulations and their history.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from services.regulations_analyzer.dependencies import get_store
from services.regulations_analyzer.models import Regulation
from services.regulations_analyzer.store import RegulationStore
from shared.logging import get_logger
from shared.models import (
    AgencyRef,
    HistoryEntry,
    PaginatedResponse,
    Pagination,
    RegulationDetail,
    RegulationSummary,
)


logger = get_logger(__name__)

router = APIRouter()

HISTORY_LIMIT = 10


def _agency_ref(regulation: Regulation) -> AgencyRef | None:
    agency = regulation.agency
    if agency is None:
        return None
    return AgencyRef(
        id=agency.id,
        name=agency.name,
        short_name=agency.short_name,
        title_number=agency.title_number,
    )


def _summary(regulation: Regulation) -> RegulationSummary:
    return RegulationSummary(
        id=regulation.id,
        agency_id=regulation.agency_id,
        title_number=regulation.title_number,
        part_number=regulation.part_number,
        section_number=regulation.section_number,
        citation=regulation.citation,
        word_count=regulation.word_count or 0,
        complexity=regulation.complexity or 0.0,
        last_updated=regulation.last_updated,
        agency=_agency_ref(regulation),
    )


@router.get("", response_model=PaginatedResponse[RegulationSummary])
async def list_regulations(
    agency_id: int | None = Query(default=None, description="Filter by agency"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    store: RegulationStore = Depends(get_store),
) -> PaginatedResponse[RegulationSummary]:
    """
    List regulations, most recently updated first.

    Args:
        agency_id: Only regulations of this agency
        page: Page number
        limit: Items per page
        store: Regulation store
    """
    pagination = Pagination(page=page, page_size=limit)
    total, regulations = await store.list_regulations(
        offset=pagination.offset,
        limit=pagination.limit,
        agency_id=agency_id,
    )

    logger.debug("regulations_listed", total=total, page=page, agency_id=agency_id)

    return PaginatedResponse(
        items=[_summary(reg) for reg in regulations],
        total=total,
        page=page,
        page_size=limit,
        pages=pagination.pages_for(total),
    )


@router.get("/{regulation_id}", response_model=RegulationDetail)
async def get_regulation(
    regulation_id: int,
    store: RegulationStore = Depends(get_store),
) -> RegulationDetail:
    """
    Get a regulation with its text, agency and recent history.

    Args:
        regulation_id: Regulation ID
        store: Regulation store
    """
    regulation = await store.get_regulation(regulation_id)
    if regulation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Regulation not found: {regulation_id}",
        )

    history = await store.list_history(regulation_id, limit=HISTORY_LIMIT)

    return RegulationDetail(
        **_summary(regulation).model_dump(),
        content=regulation.content,
        checksum=regulation.checksum,
        history=[
            HistoryEntry(
                id=entry.id,
                change_type=entry.change_type.value,
                word_count=entry.word_count,
                checksum=entry.checksum,
                recorded_at=entry.recorded_at,
            )
            for entry in history
        ],
    )
