"""
Analysis Routes
===============

API endpoints for dataset-wide analytics:
- Overview: totals, top agencies, length distribution, long regulations
- Word count: per-agency word statistics
- Deregulation: agencies ranked by opportunity score

Version: 0.1.0
"""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from services.regulations_analyzer import __version__
from services.regulations_analyzer.dependencies import as_int, content_preview, get_store
from services.regulations_analyzer.metrics import AgencyAggregator, DeregulationScorer
from services.regulations_analyzer.models import Regulation
from services.regulations_analyzer.store import RegulationStore
from shared.config import Settings, get_settings
from shared.logging import get_logger
from shared.models import (
    AgencyDeregulationScore,
    AgencyWordCount,
    AnalysisOverview,
    ComplexityBucket,
    DeregulationOpportunity,
    DeregulationResponse,
    HealthResponse,
    OverviewSummary,
    TopAgency,
    WordCountResponse,
    WordCountSummary,
)


logger = get_logger(__name__)

router = APIRouter()

# Exclusive upper word bounds; anything longer is "Very High"
LENGTH_BUCKETS = {"Low": 100, "Medium": 150, "High": 200}

PREVIEW_LENGTH = 100

RECOMMENDED_ACTIONS = [
    "Review regulations with 200+ words for simplification",
    "Consolidate redundant requirements across agencies",
    "Implement plain language principles",
    "Digitize manual compliance processes",
]


def classify_opportunity(word_count: int) -> tuple[str, str]:
    """Complexity and impact labels for a regulation of the given length."""
    if word_count >= 200:
        return "Very High", "High"
    if word_count >= 175:
        return "High", "Medium"
    if word_count >= 150:
        return "Medium", "Medium"
    return "Low", "Low"


def estimated_savings(word_count: int) -> str:
    return f"${word_count * 100:,}-{word_count * 500:,}"


def _opportunity(regulation: Regulation) -> DeregulationOpportunity:
    word_count = regulation.word_count or 0
    complexity, impact = classify_opportunity(word_count)
    agency = regulation.agency
    agency_name = (agency.short_name or agency.name) if agency else "Unknown Agency"

    return DeregulationOpportunity(
        regulation_id=regulation.id,
        title=regulation.citation,
        agency_name=agency_name,
        word_count=word_count,
        complexity=complexity,
        impact=impact,
        estimated_savings=estimated_savings(word_count),
        simplification_potential="High" if word_count > 175 else "Medium",
        content_preview=content_preview(regulation.content, PREVIEW_LENGTH),
    )


@router.get("/health", response_model=HealthResponse)
async def analysis_health() -> HealthResponse:
    """Liveness of the analysis router."""
    return HealthResponse(service="analysis-api", version=__version__)


@router.get("/overview", response_model=AnalysisOverview)
async def get_overview(
    store: RegulationStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AnalysisOverview:
    """Totals, top agencies, length distribution and deregulation candidates."""
    agency_count, regulation_count = await store.counts()
    totals = await store.word_totals()

    agency_stats = [s for s in await store.agency_word_stats() if s.regulation_count > 0]
    agency_stats.sort(key=lambda s: s.regulation_count, reverse=True)
    top_agencies = [
        TopAgency(agency_name=s.short_name or s.name, regulation_count=s.regulation_count)
        for s in agency_stats[: settings.analysis.top_agencies_limit]
    ]

    distribution = await store.length_distribution(LENGTH_BUCKETS)

    candidates = await store.longest_regulations(
        limit=settings.analysis.top_candidates_limit,
        min_words=settings.analysis.deregulation_min_words,
    )
    opportunities = [_opportunity(reg) for reg in candidates]

    logger.info(
        "overview_generated",
        regulations=regulation_count,
        opportunities=len(opportunities),
    )

    return AnalysisOverview(
        total_regulations=regulation_count,
        total_agencies=agency_count,
        avg_words_per_regulation=as_int(totals.avg_words),
        total_words=totals.total_words,
        top_agencies=top_agencies,
        complexity_distribution=[
            ComplexityBucket(name=name, count=count) for name, count in distribution.items()
        ],
        deregulation_opportunities=opportunities,
        summary=OverviewSummary(
            high_complexity_count=len(opportunities),
            recommended_actions=RECOMMENDED_ACTIONS,
        ),
    )


@router.get("/wordcount", response_model=WordCountResponse)
async def get_word_count(store: RegulationStore = Depends(get_store)) -> WordCountResponse:
    """Per-agency word statistics, highest average first."""
    stats = await store.agency_word_stats(only_with_regulations=True)
    stats.sort(key=lambda s: s.avg_word_count, reverse=True)

    entries = [
        AgencyWordCount(
            agency_id=s.id,
            agency=s.short_name or s.name,
            regulation_count=s.regulation_count,
            avg_word_count=as_int(s.avg_word_count),
            total_words=s.total_words,
            max_word_count=s.max_word_count,
            min_word_count=s.min_word_count,
        )
        for s in stats
    ]

    overall_avg = sum(e.avg_word_count for e in entries) / len(entries) if entries else 0.0

    return WordCountResponse(
        word_count_by_agency=entries,
        summary=WordCountSummary(
            total_agencies=len(entries),
            total_regulations=sum(e.regulation_count for e in entries),
            overall_avg_words=as_int(overall_avg),
        ),
    )


@router.get("/deregulation", response_model=DeregulationResponse)
async def get_deregulation_scores(
    store: RegulationStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> DeregulationResponse:
    """
    Rank agencies by deregulation opportunity score.

    Scores are computed from the current regulations rather than read from
    the metric cache, so they reflect data imported since the last refresh.
    """
    aggregator = AgencyAggregator(recent_days=settings.analysis.recent_update_days)
    scorer = DeregulationScorer()
    now = datetime.now(UTC)

    results: list[AgencyDeregulationScore] = []
    for agency in await store.list_agencies():
        regulations = await store.list_regulations_by_agency(agency.id)
        stats = aggregator.aggregate(agency.id, regulations, now=now)
        if stats is None:
            continue

        score = scorer.score(stats)
        results.append(
            AgencyDeregulationScore(
                agency_id=agency.id,
                agency_name=agency.name,
                short_name=agency.short_name,
                regulation_count=stats.regulation_count,
                total_words=stats.total_words,
                avg_words=stats.avg_words,
                avg_complexity=stats.avg_complexity,
                update_frequency_percent=stats.update_frequency_percent,
                deregulation_score=score.score,
            )
        )

    results.sort(key=lambda r: r.deregulation_score, reverse=True)

    return DeregulationResponse(agencies=results, total_count=len(results))
