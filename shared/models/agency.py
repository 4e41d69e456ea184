"""
Agency Models
=============

API models for agencies and their word statistics.

Version: 0.1.0
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class AgencyRef(BaseModel):
    """Minimal agency reference embedded in other resources."""

    id: int
    name: str
    short_name: str | None = None
    title_number: int | None = None


class AgencySummary(AgencyRef):
    """Agency with regulation count and word statistics."""

    description: str | None = None

    regulation_count: int = 0
    total_words: int = 0
    avg_word_count: int = 0
    max_word_count: int = 0
    avg_complexity: float = 0.0

    # Coarse length-based score: average words / 10
    complexity_score: int = 0


class RegulationPreview(BaseModel):
    """Short view of a regulation inside an agency detail."""

    id: int
    title: str
    part_number: str
    section_number: str
    word_count: int
    complexity: float
    content_preview: str
    last_updated: datetime | None = None


class AgencyDetail(AgencySummary):
    """Agency with cached metrics and its longest regulations."""

    metrics: dict[str, float] = Field(default_factory=dict)
    top_regulations: list[RegulationPreview] = Field(default_factory=list)


class AgencyListResponse(BaseModel):
    """All agencies."""

    agencies: list[AgencySummary]
    total_count: int
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AgencyDetailResponse(BaseModel):
    """One agency."""

    agency: AgencyDetail
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
