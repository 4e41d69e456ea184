"""
Shared Models
=============

Pydantic API models.

Models:
- Agency models (AgencySummary, AgencyDetail)
- Regulation models (RegulationSummary, RegulationDetail, HistoryEntry)
- Analysis models (AnalysisOverview, WordCountResponse, DeregulationResponse)
"""

from shared.models.agency import (
    AgencyDetail,
    AgencyDetailResponse,
    AgencyListResponse,
    AgencyRef,
    AgencySummary,
    RegulationPreview,
)
from shared.models.analysis import (
    ActionResponse,
    AgencyDeregulationScore,
    AgencyWordCount,
    AnalysisOverview,
    ComplexityBucket,
    DataStatus,
    DeregulationOpportunity,
    DeregulationResponse,
    OverviewSummary,
    TopAgency,
    WordCountResponse,
    WordCountSummary,
)
from shared.models.common import (
    ErrorResponse,
    HealthResponse,
    PaginatedResponse,
    Pagination,
)
from shared.models.regulation import (
    HistoryEntry,
    RegulationDetail,
    RegulationSummary,
)

__all__ = [
    # Agency
    "AgencyDetail",
    "AgencyDetailResponse",
    "AgencyListResponse",
    "AgencyRef",
    "AgencySummary",
    "RegulationPreview",
    # Regulation
    "HistoryEntry",
    "RegulationDetail",
    "RegulationSummary",
    # Analysis
    "ActionResponse",
    "AgencyDeregulationScore",
    "AgencyWordCount",
    "AnalysisOverview",
    "ComplexityBucket",
    "DataStatus",
    "DeregulationOpportunity",
    "DeregulationResponse",
    "OverviewSummary",
    "TopAgency",
    "WordCountResponse",
    "WordCountSummary",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "PaginatedResponse",
    "Pagination",
]
