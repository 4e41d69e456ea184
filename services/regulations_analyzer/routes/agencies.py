"""
Agencies Routes
===============

API endpoints for agencies and their regulation statistics.

Version: 0.1.0
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from services.regulations_analyzer import __version__
from services.regulations_analyzer.dependencies import as_int, content_preview, get_store
from services.regulations_analyzer.metrics.text import round_half_up
from services.regulations_analyzer.store import AgencyWordStats, RegulationStore
from shared.logging import get_logger
from shared.models import (
    AgencyDetail,
    AgencyDetailResponse,
    AgencyListResponse,
    AgencySummary,
    HealthResponse,
    RegulationPreview,
)


logger = get_logger(__name__)

router = APIRouter()

TOP_REGULATIONS_LIMIT = 10
PREVIEW_LENGTH = 150


def _summary_fields(stats: AgencyWordStats) -> dict[str, Any]:
    return {
        "id": stats.id,
        "name": stats.name,
        "short_name": stats.short_name,
        "title_number": stats.title_number,
        "description": stats.description,
        "regulation_count": stats.regulation_count,
        "total_words": stats.total_words,
        "avg_word_count": as_int(stats.avg_word_count),
        "max_word_count": stats.max_word_count,
        "avg_complexity": round_half_up(stats.avg_complexity),
        "complexity_score": as_int(stats.avg_word_count / 10),
    }


@router.get("/health", response_model=HealthResponse)
async def agencies_health() -> HealthResponse:
    """Liveness of the agencies router."""
    return HealthResponse(service="agencies-api", version=__version__)


@router.get("", response_model=AgencyListResponse)
async def list_agencies(store: RegulationStore = Depends(get_store)) -> AgencyListResponse:
    """List every agency with regulation counts and word statistics, sorted by name."""
    stats = await store.agency_word_stats()
    agencies = [AgencySummary(**_summary_fields(s)) for s in stats]

    logger.debug("agencies_listed", total=len(agencies))

    return AgencyListResponse(agencies=agencies, total_count=len(agencies))


@router.get("/{agency_id}", response_model=AgencyDetailResponse)
async def get_agency(
    agency_id: int,
    store: RegulationStore = Depends(get_store),
) -> AgencyDetailResponse:
    """
    Get one agency with its cached metrics and longest regulations.

    Args:
        agency_id: Agency ID
        store: Regulation store
    """
    stats = await store.agency_word_stats(agency_id=agency_id)
    if not stats:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agency not found: {agency_id}",
        )

    metrics = await store.get_metrics(agency_id)
    regulations = await store.longest_regulations(limit=TOP_REGULATIONS_LIMIT, agency_id=agency_id)

    agency = AgencyDetail(
        **_summary_fields(stats[0]),
        metrics=metrics,
        top_regulations=[
            RegulationPreview(
                id=reg.id,
                title=reg.citation,
                part_number=reg.part_number,
                section_number=reg.section_number,
                word_count=reg.word_count or 0,
                complexity=reg.complexity or 0.0,
                content_preview=content_preview(reg.content, PREVIEW_LENGTH),
                last_updated=reg.last_updated,
            )
            for reg in regulations
        ],
    )

    logger.debug("agency_retrieved", agency_id=agency_id, regulations=len(regulations))

    return AgencyDetailResponse(agency=agency)
