"""
Regulation Models
=================

API models for regulations and their version history.

Version: 0.1.0
"""

from datetime import datetime

from pydantic import BaseModel, Field

from shared.models.agency import AgencyRef


class HistoryEntry(BaseModel):
    """One recorded transition of a regulation."""

    id: int
    change_type: str
    word_count: int
    checksum: str
    recorded_at: datetime | None = None


class RegulationSummary(BaseModel):
    """Regulation without its text."""

    id: int
    agency_id: int
    title_number: int
    part_number: str
    section_number: str
    citation: str

    word_count: int
    complexity: float
    last_updated: datetime | None = None

    agency: AgencyRef | None = None


class RegulationDetail(RegulationSummary):
    """Regulation with text and recent history."""

    content: str
    checksum: str
    history: list[HistoryEntry] = Field(default_factory=list)
