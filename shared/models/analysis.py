"""
Analysis Models
===============

API models for the overview, word count and deregulation reports, and
for data management status.

Version: 0.1.0
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class TopAgency(BaseModel):
    """Agency ranked by number of regulations."""

    agency_name: str
    regulation_count: int


class ComplexityBucket(BaseModel):
    """Number of regulations in one length bucket."""

    name: str
    count: int


class DeregulationOpportunity(BaseModel):
    """A long regulation flagged as a simplification candidate."""

    regulation_id: int
    title: str
    agency_name: str
    word_count: int
    complexity: str
    impact: str
    estimated_savings: str
    simplification_potential: str
    content_preview: str


class OverviewSummary(BaseModel):
    """Headline findings of the overview."""

    high_complexity_count: int
    potential_savings_range: str = "$50K - $2M per regulation"
    recommended_actions: list[str] = Field(default_factory=list)


class AnalysisOverview(BaseModel):
    """Dataset-wide analysis overview."""

    total_regulations: int
    total_agencies: int
    avg_words_per_regulation: int
    total_words: int
    top_agencies: list[TopAgency]
    complexity_distribution: list[ComplexityBucket]
    deregulation_opportunities: list[DeregulationOpportunity]
    summary: OverviewSummary
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AgencyWordCount(BaseModel):
    """Word statistics for one agency."""

    agency_id: int
    agency: str
    regulation_count: int
    avg_word_count: int
    total_words: int
    max_word_count: int
    min_word_count: int


class WordCountSummary(BaseModel):
    """Totals across the word count report."""

    total_agencies: int
    total_regulations: int
    overall_avg_words: int


class WordCountResponse(BaseModel):
    """Per-agency word count report, longest average first."""

    word_count_by_agency: list[AgencyWordCount]
    summary: WordCountSummary
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AgencyDeregulationScore(BaseModel):
    """Aggregate statistics and opportunity score for one agency."""

    agency_id: int
    agency_name: str
    short_name: str | None = None
    regulation_count: int
    total_words: int
    avg_words: float
    avg_complexity: float
    update_frequency_percent: float
    deregulation_score: float


class DeregulationResponse(BaseModel):
    """Agencies ranked by deregulation opportunity score."""

    agencies: list[AgencyDeregulationScore]
    total_count: int
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class DataStatus(BaseModel):
    """Stored data counts and import state."""

    agencies: int
    regulations: int
    has_data: bool
    import_running: bool = False
    last_import: dict[str, Any] | None = None
    last_error: str | None = None
    last_checked: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ActionResponse(BaseModel):
    """Acknowledgement of a data management action."""

    success: bool = True
    message: str
    note: str | None = None
